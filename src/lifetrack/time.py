# SPDX-License-Identifier: MIT

import datetime
import re

import pendulum

from lifetrack.errors import ParseError

_DATE_KEY_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_MONTH_KEY_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def today() -> pendulum.Date:
    """The current calendar day in the local timezone."""
    return pendulum.today("local").date()


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def to_date(value: datetime.date) -> pendulum.Date:
    """Drop any time component and return the calendar day as a pendulum.Date."""
    return pendulum.date(value.year, value.month, value.day)


def date_key(date: datetime.date) -> str:
    """Canonical 'YYYY-MM-DD' key of a calendar day. No timezone conversion."""
    return f"{date.year:04d}-{date.month:02d}-{date.day:02d}"


def parse_date(value: str) -> pendulum.Date:
    """Parse a 'YYYY-MM-DD' key into a calendar day.

    Only the zero-padded canonical form is accepted. Anything else,
    including impossible days like 2023-02-29, raises ParseError.
    """
    if not isinstance(value, str):
        raise ParseError(f"Invalid date: {value!r}")
    match = _DATE_KEY_PATTERN.match(value)
    if match is None:
        raise ParseError(f"Invalid date: {value!r}, expected YYYY-MM-DD")
    year, month, day = (int(part) for part in match.groups())
    try:
        return pendulum.date(year, month, day)
    except ValueError as e:
        raise ParseError(f"Invalid date: {value!r} ({e})") from e


def parse_date_or(value: str, fallback: pendulum.Date) -> pendulum.Date:
    """Parse a date key, returning the caller-supplied fallback when malformed."""
    try:
        return parse_date(value)
    except ParseError:
        return fallback


def month_key(date: datetime.date) -> str:
    """'YYYY-MM' prefix shared by every date key in the month."""
    return f"{date.year:04d}-{date.month:02d}"


def parse_month(value: str) -> pendulum.Date:
    """Parse 'YYYY-MM' (or a full date key) into the first day of that month."""
    if not isinstance(value, str):
        raise ParseError(f"Invalid month: {value!r}")
    match = _MONTH_KEY_PATTERN.match(value)
    if match is None:
        return parse_date(value).start_of("month")
    year, month = (int(part) for part in match.groups())
    try:
        return pendulum.date(year, month, 1)
    except ValueError as e:
        raise ParseError(f"Invalid month: {value!r} ({e})") from e
