# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from lifetrack.model.track_type import TrackType
from lifetrack.service.format import value_input_label
from lifetrack.view.views.header import header
from lifetrack.view.views.util import (
    BADGE,
    format_metadata,
    short_id,
    track_type_label,
    track_type_style,
)


def track_types_view(track_types: list[TrackType]) -> None:
    """Display the track types in a table."""
    header("track types")

    table = Table(box=box.SIMPLE)
    table.add_column("id")
    table.add_column("")
    table.add_column("label")
    table.add_column("value")
    table.add_column("metadata")

    for track_type in track_types:
        table.add_row(
            short_id(track_type["id"]),
            Text(BADGE, style=track_type_style(track_type)),
            track_type_label(track_type),
            value_input_label(track_type),
            format_metadata(track_type["metadata"]),
        )

    console = Console()
    if not track_types:
        console.print("No track types yet. Add one with: lifetrack type add LABEL")
        return
    console.print(table)


def single_track_type_view(track_type: TrackType) -> None:
    """Display detailed view of a single track type."""
    header("track type")

    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("field", style="bold")
    table.add_column("value")

    table.add_row("id", track_type["id"])
    table.add_row("label", track_type_label(track_type))
    table.add_row("color", Text(track_type["color"], style=track_type_style(track_type)))
    table.add_row("value type", track_type["value_type"])
    if track_type["value_unit"] is not None:
        table.add_row("unit", track_type["value_unit"])
    if track_type["value_type"] == "duration":
        table.add_row("duration unit", track_type["duration_unit"] or "minutes")
    if track_type["metadata"]:
        table.add_row("metadata", format_metadata(track_type["metadata"]))

    Console().print(table)
