# SPDX-License-Identifier: MIT

import datetime
from typing import Optional

import pendulum

from lifetrack.model.activity import ActivitySummary, DayBadges, MonthActivity
from lifetrack.model.entity_id import EntityId
from lifetrack.repository.entry_index import EntryIndex
from lifetrack.time import date_key, month_key, parse_date, to_date

DEFAULT_DAY_BADGE_CAP = 5


def track_types_for_day(index: EntryIndex, day_key: str) -> list[EntityId]:
    """
    Distinct track type ids with an entry on the day, ordered by their first
    entry of that day.
    """
    parse_date(day_key)
    return list(dict.fromkeys(index.track_type_ids_on(day_key)))


def day_badges(
    index: EntryIndex,
    day_key: str,
    display_cap: int = DEFAULT_DAY_BADGE_CAP,
) -> DayBadges:
    """
    Badges to draw in a day cell: at most display_cap distinct track types,
    plus how many more there are.
    """
    if display_cap < 0:
        raise ValueError(f"display_cap must not be negative, got {display_cap}")
    track_type_ids = track_types_for_day(index, day_key)
    return {
        "track_type_ids": track_type_ids[:display_cap],
        "overflow": max(0, len(track_type_ids) - display_cap),
    }


def month_activity(
    index: EntryIndex,
    month: datetime.date,
) -> dict[EntityId, MonthActivity]:
    """
    Per track type entry count and sorted distinct days for one month.

    Every known track type is present, with a zero count when it has no
    entries that month. Track type ids only referenced by entries are
    included as well.
    """
    activity: dict[EntityId, MonthActivity] = {
        track_type["id"]: {"count": 0, "distinct_dates": []}
        for track_type in index.track_types
    }
    dates_by_track_type: dict[EntityId, set[str]] = {
        track_type_id: set() for track_type_id in activity
    }

    for entry in index.entries_in_month(month_key(month)):
        track_type_id = entry["track_type_id"]
        if track_type_id not in activity:
            activity[track_type_id] = {"count": 0, "distinct_dates": []}
            dates_by_track_type[track_type_id] = set()
        activity[track_type_id]["count"] += 1
        dates_by_track_type[track_type_id].add(entry["date"])

    for track_type_id, dates in dates_by_track_type.items():
        activity[track_type_id]["distinct_dates"] = sorted(dates)

    return activity


def timeline_activity(
    index: EntryIndex,
    months: list[pendulum.Date],
) -> list[tuple[pendulum.Date, dict[EntityId, MonthActivity]]]:
    """month_activity for each month of a timeline window, in the same order."""
    return [(month, month_activity(index, month)) for month in months]


def rolling_count(
    index: EntryIndex,
    track_type_id: EntityId,
    since_date_key: str,
) -> int:
    """
    Number of entries of a track type with date >= since_date_key.

    The cutoff is compared as a string, so sentinels like "0000-00-00" count
    every entry.
    """
    return index.count_since(track_type_id, since_date_key)


def past_month_cutoff(reference: datetime.date) -> str:
    """Date key one calendar month before reference (Mar 31 -> Feb 28/29)."""
    return date_key(to_date(reference).subtract(months=1))


def past_year_cutoff(reference: datetime.date) -> str:
    """Date key one calendar year before reference (Feb 29 -> Feb 28)."""
    return date_key(to_date(reference).subtract(years=1))


def activity_summary(
    index: EntryIndex,
    reference: datetime.date,
    track_type_ids: Optional[list[EntityId]] = None,
) -> dict[EntityId, ActivitySummary]:
    """Past month, past year and all-time entry counts per track type."""
    month_cutoff = past_month_cutoff(reference)
    year_cutoff = past_year_cutoff(reference)

    if track_type_ids is None:
        track_type_ids = [track_type["id"] for track_type in index.track_types]

    return {
        track_type_id: {
            "past_month": rolling_count(index, track_type_id, month_cutoff),
            "past_year": rolling_count(index, track_type_id, year_cutoff),
            "total": rolling_count(index, track_type_id, "0000-00-00"),
        }
        for track_type_id in track_type_ids
    }
