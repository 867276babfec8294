# SPDX-License-Identifier: MIT

from abc import ABC, abstractmethod
from typing import Optional

from lifetrack.model.entity_id import EntityId
from lifetrack.model.entry import Entry, NewEntry
from lifetrack.model.patch import EntryPatch, TrackTypePatch
from lifetrack.model.track_type import NewTrackType, TrackType


class StorageClient(ABC):
    """
    Boundary with the storage backend.

    Every call is scoped to one user. Implementations raise RemoteError for
    backend rejections, network failures and timeouts.
    """

    @abstractmethod
    async def fetch_entries(self, user_id: str) -> list[Entry]:
        """All of the user's entries, ordered by date ascending."""

    @abstractmethod
    async def fetch_track_types(self, user_id: str) -> list[TrackType]: ...

    @abstractmethod
    async def create_entry(self, user_id: str, entry: NewEntry) -> Entry:
        """Create an entry; the backend assigns the id."""

    @abstractmethod
    async def patch_entry(
        self, user_id: str, id: EntityId, patch: EntryPatch
    ) -> Optional[Entry]:
        """Apply only the fields present in patch. None when no row matched."""

    @abstractmethod
    async def delete_entry(self, user_id: str, id: EntityId) -> None:
        """Delete an entry. Deleting a missing row succeeds."""

    @abstractmethod
    async def create_track_type(
        self, user_id: str, track_type: NewTrackType
    ) -> TrackType: ...

    @abstractmethod
    async def patch_track_type(
        self, user_id: str, id: EntityId, patch: TrackTypePatch
    ) -> Optional[TrackType]: ...

    @abstractmethod
    async def delete_track_type(self, user_id: str, id: EntityId) -> None: ...
