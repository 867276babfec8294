# SPDX-License-Identifier: MIT

import datetime

import pendulum

from lifetrack.time import to_date

# ISO weekday numbers, Monday = 1 .. Sunday = 7
WEEKDAYS: dict[str, int] = {
    "monday": 1,
    "tuesday": 2,
    "wednesday": 3,
    "thursday": 4,
    "friday": 5,
    "saturday": 6,
    "sunday": 7,
}

_WEEKDAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


class Calendar:
    """
    Month and week boundaries for a calendar with a configurable first weekday.

    Everything works on calendar days (pendulum.Date). Datetimes passed in
    are truncated to their date without any timezone conversion.
    """

    def __init__(self, first_weekday: str = "sunday") -> None:
        first_weekday = first_weekday.lower()
        if first_weekday not in WEEKDAYS:
            raise ValueError(
                f"Invalid first weekday: {first_weekday}. Valid options: {', '.join(WEEKDAYS)}"
            )
        self.first_weekday = first_weekday
        self._first_iso_weekday = WEEKDAYS[first_weekday]

    def start_of_month(self, date: datetime.date) -> pendulum.Date:
        return to_date(date).start_of("month")

    def end_of_month(self, date: datetime.date) -> pendulum.Date:
        return to_date(date).end_of("month")

    def start_of_week(self, date: datetime.date) -> pendulum.Date:
        day = to_date(date)
        offset = (day.isoweekday() - self._first_iso_weekday) % 7
        return day.subtract(days=offset)

    def end_of_week(self, date: datetime.date) -> pendulum.Date:
        return self.start_of_week(date).add(days=6)

    def month_grid(self, month: datetime.date) -> list[pendulum.Date]:
        """
        All days shown in a month view, including the leading and trailing days
        of the adjacent months needed to fill whole weeks.

        The result always has a length that is a multiple of 7.
        """
        start = self.start_of_week(self.start_of_month(month))
        end = self.end_of_week(self.end_of_month(month))

        days: list[pendulum.Date] = []
        day = start
        while day <= end:
            days.append(day)
            day = day.add(days=1)
        return days

    def month_weeks(self, month: datetime.date) -> list[list[pendulum.Date]]:
        grid = self.month_grid(month)
        return [grid[i : i + 7] for i in range(0, len(grid), 7)]

    def weekday_labels(self) -> list[str]:
        first = self._first_iso_weekday - 1
        return _WEEKDAY_LABELS[first:] + _WEEKDAY_LABELS[:first]

    def months_between(
        self, start: datetime.date, end: datetime.date
    ) -> list[pendulum.Date]:
        """Month starts from start's month through end's month, inclusive."""
        months: list[pendulum.Date] = []
        month = self.start_of_month(start)
        last = self.start_of_month(end)
        while month <= last:
            months.append(month)
            month = month.add(months=1)
        return months

    def is_same_month(self, a: datetime.date, b: datetime.date) -> bool:
        return a.year == b.year and a.month == b.month
