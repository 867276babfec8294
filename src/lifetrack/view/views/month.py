# SPDX-License-Identifier: MIT

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from lifetrack.color import MUTED_COLOR, TODAY_COLOR
from lifetrack.repository.entry_index import EntryIndex
from lifetrack.service.aggregation import day_badges
from lifetrack.service.calendar import Calendar
from lifetrack.time import date_key, today
from lifetrack.view.views.header import header
from lifetrack.view.views.util import BADGE, track_type_style


def day_cell(
    index: EntryIndex,
    calendar: Calendar,
    day: pendulum.Date,
    month: pendulum.Date,
    display_cap: int,
) -> Text:
    """Day number on the first line, one colored badge per track type below."""
    in_month = calendar.is_same_month(day, month)
    if day == today():
        number_style = TODAY_COLOR
    elif in_month:
        number_style = "bold"
    else:
        number_style = MUTED_COLOR

    cell = Text(f"{day.day:>2}", style=number_style)
    if not in_month:
        return cell

    badges = day_badges(index, date_key(day), display_cap)
    if badges["track_type_ids"] or badges["overflow"]:
        cell.append("\n")
    for track_type_id in badges["track_type_ids"]:
        cell.append(BADGE, style=track_type_style(index.track_type(track_type_id)))
    if badges["overflow"] > 0:
        cell.append(f"+{badges['overflow']}", style=MUTED_COLOR)
    return cell


def month_view(
    index: EntryIndex,
    calendar: Calendar,
    month: pendulum.Date,
    display_cap: int = 5,
) -> None:
    """Display a month grid with activity badges."""
    header(month.format("MMMM YYYY"))

    table = Table(box=box.SIMPLE_HEAD, show_lines=False)
    for label in calendar.weekday_labels():
        table.add_column(label, justify="center", min_width=5)

    for week in calendar.month_weeks(month):
        table.add_row(
            *[day_cell(index, calendar, day, month, display_cap) for day in week]
        )

    console = Console()
    console.print(table)

    legend = Text()
    for track_type in index.track_types:
        legend.append(f"{BADGE} ", style=track_type_style(track_type))
        legend.append(f"{track_type['label']}  ")
    if legend:
        console.print(legend)
