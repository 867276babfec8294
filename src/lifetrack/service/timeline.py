# SPDX-License-Identifier: MIT

import datetime
import logging
from typing import Callable, Literal, Optional

import pendulum

from lifetrack.service.calendar import Calendar
from lifetrack.time import parse_date, today

log = logging.getLogger(__name__)

WindowState = Literal["idle", "extending"]

MONTHS_PER_PAGE = 12
MAX_YEARS_BACK = 100


def preserve_scroll_offset(old_top: float, old_height: float, new_height: float) -> float:
    """
    Scroll offset that keeps already-rendered months in place after months
    were prepended above them.

    The view records (old_top, old_height) before calling extend_backward()
    and applies the returned offset once the taller content is rendered.
    """
    return old_top + (new_height - old_height)


class TimelineWindow:
    """
    The range of months materialized in a scrollable timeline.

    The window always ends at the current month and only grows backward,
    one page at a time, down to a hard limit of max_years_back years. It
    holds no entry data; the view pairs loaded_months with the calendar
    and aggregation functions.
    """

    def __init__(
        self,
        calendar: Calendar,
        clock: Callable[[], pendulum.Date] = today,
        page_months: int = MONTHS_PER_PAGE,
        max_years_back: int = MAX_YEARS_BACK,
    ) -> None:
        if page_months < 1:
            raise ValueError(f"page_months must be positive, got {page_months}")
        if max_years_back < 0:
            raise ValueError(f"max_years_back must not be negative, got {max_years_back}")
        self._calendar = calendar
        self._clock = clock
        self.page_months = page_months
        self.max_years_back = max_years_back
        self._current_month = calendar.start_of_month(clock())
        self._earliest_loaded_month = self._current_month.subtract(months=page_months)
        self._state: WindowState = "idle"
        self._pending_scroll_target: Optional[pendulum.Date] = None
        self.__clamp_to_limit()

    # ─────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────

    def __sync_current_month(self) -> None:
        """Re-anchor lazily when the real date has moved into a later month."""
        current_month = self._calendar.start_of_month(self._clock())
        if current_month != self._current_month:
            log.debug(
                "Timeline re-anchored from %s to %s",
                self._current_month.format("YYYY-MM"),
                current_month.format("YYYY-MM"),
            )
            self._current_month = current_month
            self.__clamp_to_limit()

    def __clamp_to_limit(self) -> None:
        limit = self.limit_month
        if self._earliest_loaded_month < limit:
            self._earliest_loaded_month = limit
        if self._earliest_loaded_month > self._current_month:
            self._earliest_loaded_month = self._current_month

    @property
    def state(self) -> WindowState:
        return self._state

    @property
    def current_month(self) -> pendulum.Date:
        self.__sync_current_month()
        return self._current_month

    @property
    def earliest_loaded_month(self) -> pendulum.Date:
        self.__sync_current_month()
        return self._earliest_loaded_month

    @property
    def limit_month(self) -> pendulum.Date:
        """Earliest month the window may ever reach."""
        return self._current_month.subtract(years=self.max_years_back)

    @property
    def loaded_months(self) -> list[pendulum.Date]:
        """Contiguous ascending month starts ending at the current month."""
        self.__sync_current_month()
        return self._calendar.months_between(
            self._earliest_loaded_month, self._current_month
        )

    def contains(self, month: datetime.date) -> bool:
        month_start = self._calendar.start_of_month(month)
        return self.earliest_loaded_month <= month_start <= self._current_month

    # ─────────────────────────────────────────────────────────────
    # Transitions
    # ─────────────────────────────────────────────────────────────

    def initialize(
        self,
        earliest_entry_date_key: Optional[str] = None,
        target_month: Optional[datetime.date] = None,
    ) -> None:
        """
        Start the window one page before the earliest entry's month or the
        target month, whichever is earlier, so both are reachable without
        extending. With neither, start one page before the current month.
        """
        self.__sync_current_month()
        anchor = self._current_month
        if earliest_entry_date_key is not None:
            anchor = min(
                anchor,
                self._calendar.start_of_month(parse_date(earliest_entry_date_key)),
            )
        if target_month is not None:
            anchor = min(anchor, self._calendar.start_of_month(target_month))

        self._earliest_loaded_month = anchor.subtract(months=self.page_months)
        self._state = "idle"
        self.__clamp_to_limit()

        if target_month is not None:
            self._pending_scroll_target = self.__clamp_target(target_month)

    def can_extend_backward(self) -> bool:
        self.__sync_current_month()
        return self._earliest_loaded_month > self.limit_month

    def extend_backward(self) -> list[pendulum.Date]:
        """
        Prepend one page of months and enter the extending state.

        Returns the prepended months, oldest first. Returns an empty list
        without changing anything while an extension is still in flight or
        once the hard limit is reached. Months already loaded keep their
        relative order, so the view only needs preserve_scroll_offset().
        """
        if self._state == "extending" or not self.can_extend_backward():
            return []

        self._state = "extending"
        previous_earliest = self._earliest_loaded_month
        self._earliest_loaded_month = previous_earliest.subtract(
            months=self.page_months
        )
        self.__clamp_to_limit()

        added = self._calendar.months_between(
            self._earliest_loaded_month, previous_earliest.subtract(months=1)
        )
        log.debug(
            "Timeline extended back to %s (%d months)",
            self._earliest_loaded_month.format("YYYY-MM"),
            len(added),
        )
        return added

    def finish_extension(self) -> None:
        """Called by the view once the prepended months are rendered."""
        self._state = "idle"

    def __clamp_target(self, month: datetime.date) -> pendulum.Date:
        month_start = self._calendar.start_of_month(month)
        if month_start > self._current_month:
            return self._current_month
        if month_start < self.limit_month:
            return self.limit_month
        return month_start

    def retarget(self, month: datetime.date) -> pendulum.Date:
        """
        Make sure month is loaded and request a one-shot scroll to it.

        Months after the current month resolve to the current month; months
        before the hard limit resolve to the limit. Returns the resolved target.
        """
        self.__sync_current_month()
        target = self.__clamp_target(month)

        while self._earliest_loaded_month > target:
            self._earliest_loaded_month = self._earliest_loaded_month.subtract(
                months=self.page_months
            )
            self.__clamp_to_limit()

        self._pending_scroll_target = target
        return target

    @property
    def pending_scroll_target(self) -> Optional[pendulum.Date]:
        return self._pending_scroll_target

    def consume_scroll_target(self) -> Optional[pendulum.Date]:
        """Return the pending scroll target once, then clear it."""
        target = self._pending_scroll_target
        self._pending_scroll_target = None
        return target
