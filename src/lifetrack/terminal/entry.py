# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from lifetrack.model.entity_id import EntityId
from lifetrack.model.entry import Entry
from lifetrack.model.patch import EntryPatch
from lifetrack.repository.entry_index import EntryIndex
from lifetrack.service.mutation import MutationCoordinator
from lifetrack.template.entry import get_entry_template
from lifetrack.terminal.custom_typer import AliasedTyperGroup
from lifetrack.terminal.parse import parse_day, parse_metadata, resolve_id
from lifetrack.terminal.runtime import run_loaded
from lifetrack.time import date_key
from lifetrack.view.views import entry as entry_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def resolve_track_type_id(index: EntryIndex, type_param: str) -> EntityId:
    """Resolve a track type by label (case-insensitive) or id prefix."""
    for track_type in index.track_types:
        if track_type["label"].lower() == type_param.lower():
            return track_type["id"]
    known_ids = [track_type["id"] for track_type in index.track_types]
    track_type_id = resolve_id(type_param, known_ids, "track type")
    if index.track_type(track_type_id) is None:
        raise typer.BadParameter(f"Unknown track type: {type_param}")
    return track_type_id


def resolve_entry_id(index: EntryIndex, id_param: str) -> EntityId:
    return resolve_id(id_param, [entry["id"] for entry in index.entries], "entry")


@app.command("add, a", no_args_is_help=True)
def add(
    day: Annotated[str, typer.Argument(help="YYYY-MM-DD, today, yesterday or -N")],
    track_type: Annotated[str, typer.Argument(help="track type label or id")],
    value: Annotated[Optional[float], typer.Option("--value", "-v")] = None,
    note: Annotated[Optional[str], typer.Option("--note", "-n")] = None,
    metadata: Annotated[
        Optional[list[str]],
        typer.Option("--meta", "-m", help="key=value, accepts multiple"),
    ] = None,
) -> None:
    """Log an entry for a day."""
    entry_date = parse_day(day)
    entry_metadata = parse_metadata(metadata)

    async def __add(coordinator: MutationCoordinator) -> tuple[EntryIndex, Entry]:
        new_entry = get_entry_template()
        new_entry["date"] = date_key(entry_date)
        new_entry["track_type_id"] = resolve_track_type_id(coordinator.index, track_type)
        new_entry["value"] = value
        new_entry["note"] = note
        new_entry["metadata"] = entry_metadata
        return coordinator.index, await coordinator.add_entry(new_entry)

    index, created = run_loaded(__add)
    entry_report.single_entry_view(index, created)


@app.command("modify, m", no_args_is_help=True)
def modify(
    id: str,
    day: Annotated[Optional[str], typer.Option("--date", "-d")] = None,
    track_type: Annotated[Optional[str], typer.Option("--type", "-t")] = None,
    value: Annotated[Optional[float], typer.Option("--value", "-v")] = None,
    note: Annotated[Optional[str], typer.Option("--note", "-n")] = None,
    metadata: Annotated[
        Optional[list[str]],
        typer.Option("--meta", "-m", help="key=value, replaces all metadata"),
    ] = None,
    remove_value: Annotated[bool, typer.Option("--remove-value")] = False,
    remove_note: Annotated[bool, typer.Option("--remove-note")] = False,
    remove_metadata: Annotated[bool, typer.Option("--remove-meta")] = False,
) -> None:
    """Change the given fields of an entry; the rest stay as they are."""
    patch: EntryPatch = {}
    if day is not None:
        patch["date"] = date_key(parse_day(day))
    if value is not None:
        patch["value"] = value
    if note is not None:
        patch["note"] = note
    if metadata is not None:
        patch["metadata"] = parse_metadata(metadata)
    if remove_value:
        patch["value"] = None
    if remove_note:
        patch["note"] = None
    if remove_metadata:
        patch["metadata"] = None

    async def __modify(coordinator: MutationCoordinator) -> tuple[EntryIndex, Entry]:
        if track_type is not None:
            patch["track_type_id"] = resolve_track_type_id(coordinator.index, track_type)
        entry_id = resolve_entry_id(coordinator.index, id)
        updated = await coordinator.update_entry(entry_id, patch)
        return coordinator.index, updated

    index, updated = run_loaded(__modify)
    entry_report.single_entry_view(index, updated)


@app.command("delete, d", no_args_is_help=True)
def delete(id: str) -> None:
    """Delete an entry."""

    async def __delete(coordinator: MutationCoordinator) -> EntityId:
        entry_id = resolve_entry_id(coordinator.index, id)
        await coordinator.delete_entry(entry_id)
        return entry_id

    entry_id = run_loaded(__delete)
    typer.echo(f"Deleted entry {entry_id}")


@app.command("day, dy")
def day(
    day: Annotated[str, typer.Argument(help="YYYY-MM-DD, today, yesterday or -N")] = "today",
) -> None:
    """Show the entries of one day."""
    view_date = parse_day(day)

    async def __index(coordinator: MutationCoordinator) -> EntryIndex:
        return coordinator.index

    entry_report.day_view(run_loaded(__index), view_date)
