# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from lifetrack.repository.configuration import CONFIGURATION_REPO
from lifetrack.repository.entry_index import EntryIndex
from lifetrack.service.calendar import Calendar
from lifetrack.service.mutation import MutationCoordinator
from lifetrack.service.timeline import TimelineWindow
from lifetrack.terminal.custom_typer import AliasedTyperGroup
from lifetrack.terminal.parse import parse_day, parse_month_option
from lifetrack.terminal.runtime import run_loaded
from lifetrack.time import today
from lifetrack.view.views.activities import activities_view
from lifetrack.view.views.month import month_view
from lifetrack.view.views.timeline import timeline_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def __load_index() -> EntryIndex:
    async def __index(coordinator: MutationCoordinator) -> EntryIndex:
        return coordinator.index

    return run_loaded(__index)


def __calendar() -> Calendar:
    return Calendar(CONFIGURATION_REPO.get_config()["first_weekday"])


@app.command("month, m")
def month(
    month: Annotated[
        Optional[str], typer.Argument(help="YYYY-MM, defaults to the current month")
    ] = None,
) -> None:
    """Month grid with one badge per track type logged on each day."""
    config = CONFIGURATION_REPO.get_config()
    calendar = __calendar()
    month_start = parse_month_option(month) or calendar.start_of_month(today())
    month_view(__load_index(), calendar, month_start, config["day_badge_cap"])


@app.command("timeline, tl")
def timeline(
    target: Annotated[
        Optional[str],
        typer.Option("--target", "-t", help="YYYY-MM month to highlight"),
    ] = None,
    pages: Annotated[
        int,
        typer.Option("--pages", "-p", help="Extra pages of older months to load"),
    ] = 0,
    show_dates: Annotated[
        bool, typer.Option("--dates/--no-dates", help="List the active days per month")
    ] = False,
) -> None:
    """Month by month activity from the earliest entry up to now."""
    config = CONFIGURATION_REPO.get_config()
    index = __load_index()

    window = TimelineWindow(
        __calendar(),
        page_months=config["timeline_page_months"],
        max_years_back=config["timeline_max_years_back"],
    )
    window.initialize(index.earliest_date_key(), parse_month_option(target))
    for _ in range(pages):
        if not window.extend_backward():
            break
        window.finish_extension()

    timeline_view(index, window, show_dates)


@app.command("activities, a")
def activities(
    reference: Annotated[
        str, typer.Option("--reference", "-r", help="Day the rolling windows end on")
    ] = "today",
) -> None:
    """Entries per track type over the past month, past year and all time."""
    activities_view(__load_index(), parse_day(reference))
