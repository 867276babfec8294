# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from lifetrack.model.entity_id import EntityId


class NewEntry(TypedDict):
    date: str  # date key, "YYYY-MM-DD", local calendar day
    track_type_id: EntityId  # Reference to owning track type

    # count or duration amount, unused for boolean track types
    value: Optional[float]
    note: Optional[str]

    # keys are expected to come from the track type's metadata schema
    metadata: Optional[dict[str, str]]


class Entry(NewEntry):
    id: EntityId  # assigned by storage on creation
