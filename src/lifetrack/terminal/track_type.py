# SPDX-License-Identifier: MIT

from typing import Annotated, Optional, cast

import typer

from lifetrack.color import get_random_color, is_hex_color
from lifetrack.model.entity_id import EntityId
from lifetrack.model.patch import TrackTypePatch
from lifetrack.model.track_type import (
    DURATION_UNITS,
    VALUE_TYPES,
    DurationUnit,
    TrackType,
    ValueType,
)
from lifetrack.service.mutation import MutationCoordinator
from lifetrack.template.track_type import get_track_type_template
from lifetrack.terminal.custom_typer import AliasedTyperGroup
from lifetrack.terminal.entry import resolve_track_type_id
from lifetrack.terminal.parse import parse_metadata
from lifetrack.terminal.runtime import run_loaded
from lifetrack.view.views import track_type as track_type_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def __validate_choice(value: Optional[str], choices: list[str], name: str) -> None:
    if value is not None and value not in choices:
        typer.echo(f"Invalid {name}: {value}. Valid options: {', '.join(choices)}")
        raise typer.Exit(1)


def __validate_color(color: Optional[str]) -> None:
    if color is not None and not is_hex_color(color):
        typer.echo(f"Invalid color: {color}. Expected #rrggbb")
        raise typer.Exit(1)


@app.command("add, a", no_args_is_help=True)
def add(
    label: str,
    color: Annotated[
        Optional[str], typer.Option("--color", "-col", help="#rrggbb, random if unset")
    ] = None,
    value_type: Annotated[
        str, typer.Option("--value-type", "-v", help="count, duration, boolean")
    ] = "count",
    unit: Annotated[
        Optional[str], typer.Option("--unit", "-u", help="Unit for count track types")
    ] = None,
    duration_unit: Annotated[
        Optional[str],
        typer.Option("--duration-unit", "-du", help="minutes, hours"),
    ] = None,
    metadata_fields: Annotated[
        Optional[list[str]],
        typer.Option(
            "--meta-field",
            "-m",
            help="name=placeholder, defines per-entry metadata (accepts multiple)",
        ),
    ] = None,
) -> None:
    """Create a new track type."""
    __validate_choice(value_type, VALUE_TYPES, "value type")
    __validate_choice(duration_unit, DURATION_UNITS, "duration unit")
    __validate_color(color)

    track_type = get_track_type_template()
    track_type["label"] = label.strip()
    track_type["color"] = color if color is not None else get_random_color()
    track_type["value_type"] = cast(ValueType, value_type)
    track_type["value_unit"] = unit if value_type == "count" else None
    if value_type == "duration":
        track_type["duration_unit"] = cast(Optional[DurationUnit], duration_unit)
    track_type["metadata"] = parse_metadata(metadata_fields)

    async def __add(coordinator: MutationCoordinator) -> TrackType:
        return await coordinator.add_track_type(track_type)

    track_type_report.single_track_type_view(run_loaded(__add))


@app.command("modify, m", no_args_is_help=True)
def modify(
    id: str,
    label: Annotated[Optional[str], typer.Option("--label", "-l")] = None,
    color: Annotated[Optional[str], typer.Option("--color", "-col")] = None,
    value_type: Annotated[
        Optional[str], typer.Option("--value-type", "-v", help="count, duration, boolean")
    ] = None,
    unit: Annotated[Optional[str], typer.Option("--unit", "-u")] = None,
    duration_unit: Annotated[
        Optional[str], typer.Option("--duration-unit", "-du", help="minutes, hours")
    ] = None,
    metadata_fields: Annotated[
        Optional[list[str]],
        typer.Option("--meta-field", "-m", help="replaces the metadata schema"),
    ] = None,
    remove_unit: Annotated[bool, typer.Option("--remove-unit")] = False,
    remove_duration_unit: Annotated[bool, typer.Option("--remove-duration-unit")] = False,
    remove_metadata_fields: Annotated[bool, typer.Option("--remove-meta-fields")] = False,
) -> None:
    """Change the given fields of a track type."""
    __validate_choice(value_type, VALUE_TYPES, "value type")
    __validate_choice(duration_unit, DURATION_UNITS, "duration unit")
    __validate_color(color)

    patch: TrackTypePatch = {}
    if label is not None:
        patch["label"] = label.strip()
    if color is not None:
        patch["color"] = color
    if value_type is not None:
        patch["value_type"] = cast(ValueType, value_type)
    if unit is not None:
        patch["value_unit"] = unit
    if duration_unit is not None:
        patch["duration_unit"] = cast(DurationUnit, duration_unit)
    if metadata_fields is not None:
        patch["metadata"] = parse_metadata(metadata_fields)
    if remove_unit:
        patch["value_unit"] = None
    if remove_duration_unit:
        patch["duration_unit"] = None
    if remove_metadata_fields:
        patch["metadata"] = None

    async def __modify(coordinator: MutationCoordinator) -> TrackType:
        track_type_id = resolve_track_type_id(coordinator.index, id)
        return await coordinator.update_track_type(track_type_id, patch)

    track_type_report.single_track_type_view(run_loaded(__modify))


@app.command("delete, d", no_args_is_help=True)
def delete(id: str) -> None:
    """
    Delete a track type. The last remaining track type cannot be deleted;
    entries logged against a deleted track type are kept.
    """

    async def __delete(coordinator: MutationCoordinator) -> tuple[EntityId, bool]:
        track_type_id = resolve_track_type_id(coordinator.index, id)
        return track_type_id, await coordinator.delete_track_type(track_type_id)

    track_type_id, deleted = run_loaded(__delete)
    if not deleted:
        typer.echo(f"Track type {track_type_id} was not deleted: it is the last one")
        raise typer.Exit(1)
    typer.echo(f"Deleted track type {track_type_id}")


@app.command("list, ls")
def list_track_types() -> None:
    """List all track types."""

    async def __track_types(coordinator: MutationCoordinator) -> list[TrackType]:
        return coordinator.index.track_types

    track_type_report.track_types_view(run_loaded(__track_types))
