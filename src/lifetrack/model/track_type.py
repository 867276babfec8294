# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

from lifetrack.model.entity_id import EntityId

ValueType = Literal["count", "duration", "boolean"]
DurationUnit = Literal["minutes", "hours"]

VALUE_TYPES: list[str] = ["count", "duration", "boolean"]
DURATION_UNITS: list[str] = ["minutes", "hours"]


class NewTrackType(TypedDict):
    label: str  # e.g., "Smoking"
    color: str  # hex, e.g., "#ef4444"
    value_type: ValueType

    # For count track types, e.g., "cigarettes"
    value_unit: Optional[str]

    # For duration track types, None reads as minutes
    duration_unit: Optional[DurationUnit]

    # Per-entry metadata schema: field name -> default/placeholder value
    metadata: Optional[dict[str, str]]


class TrackType(NewTrackType):
    id: EntityId
