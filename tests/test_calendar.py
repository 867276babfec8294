import pendulum
import pytest

from lifetrack.service.calendar import Calendar


@pytest.fixture
def calendar():
    return Calendar()


def test_month_boundaries(calendar):
    day = pendulum.date(2024, 2, 14)
    assert calendar.start_of_month(day) == pendulum.date(2024, 2, 1)
    assert calendar.end_of_month(day) == pendulum.date(2024, 2, 29)
    assert calendar.end_of_month(pendulum.date(2023, 2, 1)) == pendulum.date(2023, 2, 28)


def test_week_boundaries_start_on_sunday_by_default(calendar):
    # 2024-03-13 is a Wednesday
    wednesday = pendulum.date(2024, 3, 13)
    assert calendar.start_of_week(wednesday) == pendulum.date(2024, 3, 10)
    assert calendar.end_of_week(wednesday) == pendulum.date(2024, 3, 16)
    sunday = pendulum.date(2024, 3, 10)
    assert calendar.start_of_week(sunday) == sunday


def test_week_boundaries_with_monday_first():
    calendar = Calendar("monday")
    sunday = pendulum.date(2024, 3, 10)
    assert calendar.start_of_week(sunday) == pendulum.date(2024, 3, 4)
    assert calendar.weekday_labels()[0] == "Mon"


def test_invalid_first_weekday():
    with pytest.raises(ValueError):
        Calendar("someday")


@pytest.mark.parametrize(
    "month",
    [
        pendulum.date(2024, 2, 1),
        pendulum.date(2015, 2, 1),  # starts on Sunday, exactly four weeks
        pendulum.date(2024, 3, 1),
        pendulum.date(2024, 6, 1),
        pendulum.date(2024, 12, 1),
    ],
)
def test_month_grid_covers_whole_weeks(calendar, month):
    grid = calendar.month_grid(month)
    assert len(grid) % 7 == 0
    assert grid[0] == calendar.start_of_week(grid[0])
    assert grid[0] <= calendar.start_of_month(month)
    assert grid[-1] >= calendar.end_of_month(month)
    assert all(b == a.add(days=1) for a, b in zip(grid, grid[1:]))


def test_month_grid_without_padding(calendar):
    grid = calendar.month_grid(pendulum.date(2015, 2, 1))
    assert len(grid) == 28
    assert grid[0] == pendulum.date(2015, 2, 1)


def test_month_weeks(calendar):
    weeks = calendar.month_weeks(pendulum.date(2024, 3, 1))
    assert all(len(week) == 7 for week in weeks)
    assert weeks[0][0] == pendulum.date(2024, 2, 25)
    assert weeks[0][0] in calendar.month_grid(pendulum.date(2024, 3, 1))


def test_months_between(calendar):
    months = calendar.months_between(pendulum.date(2023, 11, 20), pendulum.date(2024, 2, 3))
    assert months == [
        pendulum.date(2023, 11, 1),
        pendulum.date(2023, 12, 1),
        pendulum.date(2024, 1, 1),
        pendulum.date(2024, 2, 1),
    ]
    assert calendar.months_between(pendulum.date(2024, 2, 1), pendulum.date(2024, 1, 1)) == []


def test_is_same_month(calendar):
    assert calendar.is_same_month(pendulum.date(2024, 3, 1), pendulum.date(2024, 3, 31))
    assert not calendar.is_same_month(pendulum.date(2024, 3, 1), pendulum.date(2023, 3, 1))
