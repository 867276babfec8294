import datetime

import pendulum
import pytest

from lifetrack.errors import ParseError
from lifetrack.time import (
    date_key,
    month_key,
    parse_date,
    parse_date_or,
    parse_month,
    to_date,
)


def test_date_key_is_zero_padded():
    assert date_key(pendulum.date(2024, 3, 5)) == "2024-03-05"
    assert date_key(datetime.date(999, 1, 1)) == "0999-01-01"


def test_date_key_ignores_time_and_timezone():
    late_evening = pendulum.datetime(2024, 3, 5, 23, 59, tz="America/Los_Angeles")
    assert date_key(late_evening) == "2024-03-05"
    early_morning = pendulum.datetime(2024, 3, 6, 0, 1, tz="Asia/Tokyo")
    assert date_key(early_morning) == "2024-03-06"


@pytest.mark.parametrize(
    "day",
    [
        pendulum.date(1900, 1, 1),
        pendulum.date(1999, 12, 31),
        pendulum.date(2000, 2, 29),
        pendulum.date(2024, 2, 29),
        pendulum.date(2200, 12, 31),
    ],
)
def test_parse_date_inverts_date_key(day):
    assert parse_date(date_key(day)) == day


@pytest.mark.parametrize(
    "value",
    ["", "2024-3-5", "2024/03/05", "2023-02-29", "2024-13-01", "2024-00-10", "20240305", "abcd-ef-gh", " 2024-03-05"],
)
def test_parse_date_rejects_malformed(value):
    with pytest.raises(ParseError):
        parse_date(value)


def test_parse_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse_date("nope")


def test_parse_date_or_uses_fallback_only_when_malformed():
    fallback = pendulum.date(2000, 1, 1)
    assert parse_date_or("2024-03-05", fallback) == pendulum.date(2024, 3, 5)
    assert parse_date_or("garbage", fallback) == fallback


def test_month_key_and_parse_month():
    assert month_key(pendulum.date(2024, 3, 31)) == "2024-03"
    assert parse_month("2024-03") == pendulum.date(2024, 3, 1)
    assert parse_month("2024-03-17") == pendulum.date(2024, 3, 1)
    with pytest.raises(ParseError):
        parse_month("2024-13")
    with pytest.raises(ParseError):
        parse_month("March")


def test_to_date_truncates_datetimes():
    assert to_date(datetime.datetime(2024, 3, 5, 22, 30)) == pendulum.date(2024, 3, 5)
