# SPDX-License-Identifier: MIT

from typing import TypedDict

from lifetrack.model.entity_id import EntityId


class DayBadges(TypedDict):
    track_type_ids: list[EntityId]  # displayed, capped
    overflow: int  # distinct track types beyond the cap


class MonthActivity(TypedDict):
    count: int
    distinct_dates: list[str]  # sorted date keys


class ActivitySummary(TypedDict):
    past_month: int
    past_year: int
    total: int
