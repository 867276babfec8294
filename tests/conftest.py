"""
Shared pytest fixtures.

FakeStorageClient keeps rows in memory, records every call and can be told
to fail a given method once.
"""

import asyncio
from typing import Any, Optional

import pendulum
import pytest

from lifetrack.errors import RemoteError
from lifetrack.model.entity_id import EntityId
from lifetrack.model.entry import Entry, NewEntry
from lifetrack.model.patch import EntryPatch, TrackTypePatch
from lifetrack.model.session import Session
from lifetrack.model.track_type import NewTrackType, TrackType
from lifetrack.remote.base import StorageClient
from lifetrack.repository.entry_index import EntryIndex
from lifetrack.service.mutation import MutationCoordinator

USER_ID = "user-1"


def make_track_type(
    id: str,
    label: str,
    color: str = "#3b82f6",
    value_type: str = "count",
    value_unit: Optional[str] = None,
    duration_unit: Optional[str] = None,
) -> TrackType:
    return {
        "id": id,
        "label": label,
        "color": color,
        "value_type": value_type,  # type: ignore[typeddict-item]
        "value_unit": value_unit,
        "duration_unit": duration_unit,  # type: ignore[typeddict-item]
        "metadata": None,
    }


def make_entry(
    id: str,
    date: str,
    track_type_id: str,
    value: Optional[float] = None,
    note: Optional[str] = None,
) -> Entry:
    return {
        "id": id,
        "date": date,
        "track_type_id": track_type_id,
        "value": value,
        "note": note,
        "metadata": None,
    }


def make_new_entry(date: str, track_type_id: str, value: Optional[float] = None) -> NewEntry:
    return {
        "date": date,
        "track_type_id": track_type_id,
        "value": value,
        "note": None,
        "metadata": None,
    }


class FakeStorageClient(StorageClient):
    def __init__(
        self,
        entries: Optional[list[Entry]] = None,
        track_types: Optional[list[TrackType]] = None,
        owner: str = USER_ID,
    ) -> None:
        self.owner = owner
        self.entries: dict[EntityId, Entry] = {e["id"]: e for e in entries or []}
        self.track_types: dict[EntityId, TrackType] = {
            t["id"]: t for t in track_types or []
        }
        self.calls: list[tuple[str, Any]] = []
        self.failures: dict[str, BaseException] = {}
        self.holds: dict[str, asyncio.Event] = {}
        self.next_id = 1

    def fail(self, method: str, error: Optional[BaseException] = None) -> None:
        """Make the next call to method raise error."""
        self.failures[method] = error if error is not None else RemoteError("boom")

    def hold(self, method: str) -> asyncio.Event:
        """Make the next call to method wait until the returned event is set."""
        gate = asyncio.Event()
        self.holds[method] = gate
        return gate

    def calls_to(self, method: str) -> list[Any]:
        return [args for name, args in self.calls if name == method]

    async def __enter(self, method: str, *args: Any) -> None:
        self.calls.append((method, args))
        # Give other tasks a chance to run, as a real request would
        await asyncio.sleep(0)
        gate = self.holds.pop(method, None)
        if gate is not None:
            await gate.wait()
        error = self.failures.pop(method, None)
        if error is not None:
            raise error

    def __new_id(self, prefix: str) -> EntityId:
        id = f"{prefix}-{self.next_id}"
        self.next_id += 1
        return id

    async def fetch_entries(self, user_id: str) -> list[Entry]:
        await self.__enter("fetch_entries", user_id)
        if user_id != self.owner:
            return []
        return sorted(
            (dict(e) for e in self.entries.values()),  # type: ignore[misc]
            key=lambda e: e["date"],
        )

    async def fetch_track_types(self, user_id: str) -> list[TrackType]:
        await self.__enter("fetch_track_types", user_id)
        if user_id != self.owner:
            return []
        return [dict(t) for t in self.track_types.values()]  # type: ignore[misc]

    async def create_entry(self, user_id: str, entry: NewEntry) -> Entry:
        await self.__enter("create_entry", user_id, entry)
        created: Entry = {**entry, "id": self.__new_id("entry")}  # type: ignore[typeddict-item]
        self.entries[created["id"]] = created
        return dict(created)  # type: ignore[return-value]

    async def patch_entry(
        self, user_id: str, id: EntityId, patch: EntryPatch
    ) -> Optional[Entry]:
        await self.__enter("patch_entry", user_id, id, patch)
        if id not in self.entries:
            return None
        updated: Entry = {**self.entries[id], **patch}  # type: ignore[typeddict-item]
        self.entries[id] = updated
        return dict(updated)  # type: ignore[return-value]

    async def delete_entry(self, user_id: str, id: EntityId) -> None:
        await self.__enter("delete_entry", user_id, id)
        self.entries.pop(id, None)

    async def create_track_type(
        self, user_id: str, track_type: NewTrackType
    ) -> TrackType:
        await self.__enter("create_track_type", user_id, track_type)
        created: TrackType = {**track_type, "id": self.__new_id("type")}  # type: ignore[typeddict-item]
        self.track_types[created["id"]] = created
        return dict(created)  # type: ignore[return-value]

    async def patch_track_type(
        self, user_id: str, id: EntityId, patch: TrackTypePatch
    ) -> Optional[TrackType]:
        await self.__enter("patch_track_type", user_id, id, patch)
        if id not in self.track_types:
            return None
        updated: TrackType = {**self.track_types[id], **patch}  # type: ignore[typeddict-item]
        self.track_types[id] = updated
        return dict(updated)  # type: ignore[return-value]

    async def delete_track_type(self, user_id: str, id: EntityId) -> None:
        await self.__enter("delete_track_type", user_id, id)
        self.track_types.pop(id, None)


@pytest.fixture
def session() -> Session:
    return {"user_id": USER_ID, "access_token": "token"}


@pytest.fixture
def track_types() -> list[TrackType]:
    return [
        make_track_type("run", "Running", value_type="duration"),
        make_track_type("read", "Reading", value_unit="pages"),
        make_track_type("meditate", "Meditation", value_type="boolean"),
    ]


@pytest.fixture
def entries() -> list[Entry]:
    return [
        make_entry("e1", "2024-03-05", "run", 30),
        make_entry("e2", "2024-03-05", "read", 12),
        make_entry("e3", "2024-03-05", "run", 15),
        make_entry("e4", "2024-03-20", "meditate"),
        make_entry("e5", "2024-02-29", "read", 40),
        make_entry("e6", "2023-12-31", "run", 60),
    ]


@pytest.fixture
def index(entries: list[Entry], track_types: list[TrackType]) -> EntryIndex:
    index = EntryIndex()
    index.rebuild(entries, track_types)
    return index


@pytest.fixture
def storage(entries: list[Entry], track_types: list[TrackType]) -> FakeStorageClient:
    return FakeStorageClient(entries, track_types)


@pytest.fixture
def coordinator(storage: FakeStorageClient, session: Session) -> MutationCoordinator:
    return MutationCoordinator(storage, session)


@pytest.fixture
def fixed_today():
    """A clock frozen on 2024-03-15."""
    return lambda: pendulum.date(2024, 3, 15)
