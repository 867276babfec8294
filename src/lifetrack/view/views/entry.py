# SPDX-License-Identifier: MIT

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from lifetrack.model.entry import Entry
from lifetrack.repository.entry_index import EntryIndex
from lifetrack.service.format import format_entry_value
from lifetrack.time import date_key
from lifetrack.view.views.header import header
from lifetrack.view.views.util import format_metadata, short_id, track_type_label


def entries_table(index: EntryIndex, entries: list[Entry]) -> Table:
    table = Table(box=box.SIMPLE)
    table.add_column("id")
    table.add_column("date")
    table.add_column("type")
    table.add_column("value")
    table.add_column("note")
    table.add_column("metadata")

    for entry in entries:
        track_type = index.track_type(entry["track_type_id"])
        table.add_row(
            short_id(entry["id"]),
            entry["date"],
            track_type_label(track_type),
            format_entry_value(entry, track_type) or "",
            entry["note"] or "",
            format_metadata(entry["metadata"]),
        )
    return table


def day_view(index: EntryIndex, day: pendulum.Date) -> None:
    """Display the entries of one day."""
    header(day.format("YYYY-MM-DD ddd"))

    entries = index.entries_on(date_key(day))
    console = Console()
    if not entries:
        console.print("No entries on this day.")
        return
    console.print(entries_table(index, entries))


def single_entry_view(index: EntryIndex, entry: Entry) -> None:
    header("entry")
    Console().print(entries_table(index, [entry]))
