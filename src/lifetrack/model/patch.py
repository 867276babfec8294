# SPDX-License-Identifier: MIT

"""Partial updates.

A key that is absent leaves the field unchanged. A key that is present
with None clears the field. Only optional fields may be cleared.
"""

from typing import Optional, TypedDict

from lifetrack.model.entity_id import EntityId
from lifetrack.model.track_type import DurationUnit, ValueType


class EntryPatch(TypedDict, total=False):
    date: str
    track_type_id: EntityId
    value: Optional[float]
    note: Optional[str]
    metadata: Optional[dict[str, str]]


class TrackTypePatch(TypedDict, total=False):
    label: str
    color: str
    value_type: ValueType
    value_unit: Optional[str]
    duration_unit: Optional[DurationUnit]
    metadata: Optional[dict[str, str]]


ENTRY_REQUIRED_FIELDS = ("date", "track_type_id")
ENTRY_FIELDS = ("date", "track_type_id", "value", "note", "metadata")
TRACK_TYPE_REQUIRED_FIELDS = ("label", "color", "value_type")
TRACK_TYPE_FIELDS = (
    "label",
    "color",
    "value_type",
    "value_unit",
    "duration_unit",
    "metadata",
)
