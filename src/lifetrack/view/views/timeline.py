# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from lifetrack.color import MUTED_COLOR
from lifetrack.repository.entry_index import EntryIndex
from lifetrack.service.aggregation import timeline_activity
from lifetrack.service.timeline import TimelineWindow
from lifetrack.view.views.header import header
from lifetrack.view.views.util import track_type_style


def timeline_view(
    index: EntryIndex,
    window: TimelineWindow,
    show_dates: bool = False,
) -> None:
    """
    Display every month of the timeline window, oldest first, with the number
    of entries per track type.

    A pending scroll target is consumed and its row highlighted.
    """
    track_types = index.track_types
    target = window.consume_scroll_target()

    header(
        f"timeline {window.earliest_loaded_month.format('YYYY-MM')}"
        f" .. {window.current_month.format('YYYY-MM')}"
    )

    table = Table(box=box.SIMPLE_HEAD)
    table.add_column("month")
    for track_type in track_types:
        table.add_column(
            Text(track_type["label"], style=track_type_style(track_type)),
            justify="right",
        )

    for month, activity in timeline_activity(index, window.loaded_months):
        label_style = "bold reverse" if target is not None and month == target else ""
        row: list[Text] = [Text(month.format("YYYY MMM"), style=label_style)]
        for track_type in track_types:
            month_activity = activity[track_type["id"]]
            if month_activity["count"] == 0:
                row.append(Text("·", style=MUTED_COLOR))
                continue
            cell = Text(str(month_activity["count"]), style=track_type_style(track_type))
            if show_dates:
                days = ",".join(key[-2:] for key in month_activity["distinct_dates"])
                cell.append(f" ({days})", style=MUTED_COLOR)
            row.append(cell)
        table.add_row(*row)

    console = Console()
    console.print(table)
    if window.can_extend_backward():
        console.print(
            Text("older months available: --pages N", style=MUTED_COLOR),
        )
