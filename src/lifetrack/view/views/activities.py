# SPDX-License-Identifier: MIT

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from lifetrack.repository.entry_index import EntryIndex
from lifetrack.service.aggregation import activity_summary
from lifetrack.view.views.header import header
from lifetrack.view.views.util import track_type_label


def activities_view(index: EntryIndex, reference: pendulum.Date) -> None:
    """Entries per track type over the past month, past year and all time."""
    header("activities")

    summary = activity_summary(index, reference)

    table = Table(box=box.SIMPLE)
    table.add_column("type")
    table.add_column("past month", justify="right")
    table.add_column("past year", justify="right")
    table.add_column("total", justify="right")

    for track_type in index.track_types:
        counts = summary[track_type["id"]]
        table.add_row(
            track_type_label(track_type),
            str(counts["past_month"]),
            str(counts["past_year"]),
            str(counts["total"]),
        )

    console = Console()
    if not index.track_types:
        console.print("No track types yet.")
        return
    console.print(table)
