# SPDX-License-Identifier: MIT

from bisect import bisect_left, bisect_right, insort_right
from copy import deepcopy
from typing import Optional

from lifetrack.model.entity_id import EntityId
from lifetrack.model.entry import Entry
from lifetrack.model.track_type import TrackType


class EntryIndex:
    """
    In-memory snapshot of one user's entries and track types.

    Entries are kept sorted by date key (stable for equal dates), and the
    lookup tables are rebuilt on every write so a reader never observes a
    half-applied change.
    """

    def __init__(self) -> None:
        self._entries: list[Entry] = []
        self._date_keys: list[str] = []
        self._entries_by_id: dict[EntityId, Entry] = {}
        self._entries_by_date: dict[str, list[Entry]] = {}
        self._entries_by_track_type: dict[EntityId, list[Entry]] = {}
        self._track_types: list[TrackType] = []
        self._track_types_by_id: dict[EntityId, TrackType] = {}

    def __reindex(self) -> None:
        self._date_keys = [entry["date"] for entry in self._entries]
        self._entries_by_id = {}
        self._entries_by_date = {}
        self._entries_by_track_type = {}
        for entry in self._entries:
            self._entries_by_id[entry["id"]] = entry
            self._entries_by_date.setdefault(entry["date"], []).append(entry)
            self._entries_by_track_type.setdefault(entry["track_type_id"], []).append(
                entry
            )
        self._track_types_by_id = {
            track_type["id"]: track_type for track_type in self._track_types
        }

    def rebuild(self, entries: list[Entry], track_types: list[TrackType]) -> None:
        """Replace the whole snapshot. Nothing from the previous state survives."""
        self._entries = sorted(deepcopy(entries), key=lambda entry: entry["date"])
        self._track_types = deepcopy(track_types)
        self.__reindex()

    def clear(self) -> None:
        self.rebuild([], [])

    # ─────────────────────────────────────────────────────────────
    # Reads
    # ─────────────────────────────────────────────────────────────

    @property
    def entries(self) -> list[Entry]:
        return deepcopy(self._entries)

    @property
    def track_types(self) -> list[TrackType]:
        return deepcopy(self._track_types)

    @property
    def entry_count(self) -> int:
        return len(self._entries)

    @property
    def track_type_count(self) -> int:
        return len(self._track_types)

    def is_empty(self) -> bool:
        return not self._entries and not self._track_types

    def entry(self, id: EntityId) -> Optional[Entry]:
        entry = self._entries_by_id.get(id)
        return deepcopy(entry) if entry is not None else None

    def track_type(self, id: EntityId) -> Optional[TrackType]:
        track_type = self._track_types_by_id.get(id)
        return deepcopy(track_type) if track_type is not None else None

    def entries_on(self, date_key: str) -> list[Entry]:
        """Entries of one day in the order they were stored."""
        return deepcopy(self._entries_by_date.get(date_key, []))

    def entries_in_month(self, month_key: str) -> list[Entry]:
        """Entries whose date key starts with the 'YYYY-MM' month key."""
        start = bisect_left(self._date_keys, month_key)
        end = bisect_right(self._date_keys, month_key + "\uffff")
        return deepcopy(
            [
                entry
                for entry in self._entries[start:end]
                if entry["date"].startswith(month_key)
            ]
        )

    def entries_since(self, date_key: str) -> list[Entry]:
        """Entries with date >= date_key, compared as strings."""
        start = bisect_left(self._date_keys, date_key)
        return deepcopy(self._entries[start:])

    def entries_for_track_type(self, track_type_id: EntityId) -> list[Entry]:
        return deepcopy(self._entries_by_track_type.get(track_type_id, []))

    def count_since(self, track_type_id: EntityId, date_key: str) -> int:
        entries = self._entries_by_track_type.get(track_type_id, [])
        return sum(1 for entry in entries if entry["date"] >= date_key)

    def track_type_ids_on(self, date_key: str) -> list[EntityId]:
        """Track type ids of one day's entries, in entry order, with repeats."""
        return [
            entry["track_type_id"] for entry in self._entries_by_date.get(date_key, [])
        ]

    def earliest_date_key(self) -> Optional[str]:
        if not self._date_keys:
            return None
        return self._date_keys[0]

    # ─────────────────────────────────────────────────────────────
    # Single-step writes
    # ─────────────────────────────────────────────────────────────

    def insert_entry(self, entry: Entry) -> None:
        """Insert keeping date order; equal dates keep insertion order."""
        insort_right(self._entries, deepcopy(entry), key=lambda e: e["date"])
        self.__reindex()

    def replace_entry(self, entry: Entry) -> bool:
        existing = [
            index for index, e in enumerate(self._entries) if e["id"] == entry["id"]
        ]
        if not existing:
            return False
        position = existing[0]
        if self._entries[position]["date"] == entry["date"]:
            # Same day: keep its position among the day's entries
            self._entries[position] = deepcopy(entry)
        else:
            self._entries = [e for e in self._entries if e["id"] != entry["id"]]
            insort_right(self._entries, deepcopy(entry), key=lambda e: e["date"])
        self.__reindex()
        return True

    def remove_entry(self, id: EntityId) -> bool:
        if id not in self._entries_by_id:
            return False
        self._entries = [entry for entry in self._entries if entry["id"] != id]
        self.__reindex()
        return True

    def append_track_type(self, track_type: TrackType) -> None:
        self._track_types.append(deepcopy(track_type))
        self.__reindex()

    def replace_track_type(self, track_type: TrackType) -> bool:
        for index, existing in enumerate(self._track_types):
            if existing["id"] == track_type["id"]:
                self._track_types[index] = deepcopy(track_type)
                self.__reindex()
                return True
        return False

    def remove_track_type(self, id: EntityId) -> bool:
        if id not in self._track_types_by_id:
            return False
        self._track_types = [
            track_type for track_type in self._track_types if track_type["id"] != id
        ]
        self.__reindex()
        return True
