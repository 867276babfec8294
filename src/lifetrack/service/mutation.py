# SPDX-License-Identifier: MIT

import asyncio
import logging
from typing import Any, Awaitable, Literal, Optional, TypeVar, cast

from lifetrack.errors import NotAuthenticated, NotFound, RemoteError
from lifetrack.model.entity_id import EntityId
from lifetrack.model.entry import Entry, NewEntry
from lifetrack.model.export import ExportSnapshot
from lifetrack.model.patch import (
    ENTRY_FIELDS,
    ENTRY_REQUIRED_FIELDS,
    TRACK_TYPE_FIELDS,
    TRACK_TYPE_REQUIRED_FIELDS,
    EntryPatch,
    TrackTypePatch,
)
from lifetrack.model.session import Session
from lifetrack.model.track_type import NewTrackType, TrackType
from lifetrack.remote.base import StorageClient
from lifetrack.repository.entry_index import EntryIndex
from lifetrack.service.export import build_export_snapshot
from lifetrack.service.legacy import is_legacy_default_set
from lifetrack.time import parse_date

log = logging.getLogger(__name__)

T = TypeVar("T")

LoadStatus = Literal["idle", "loading", "loaded", "failed"]


def validate_patch(
    patch: dict[str, Any],
    fields: tuple[str, ...],
    required_fields: tuple[str, ...],
) -> None:
    unknown = [key for key in patch if key not in fields]
    if unknown:
        raise ValueError(f"Unknown patch fields: {', '.join(unknown)}")
    cleared = [key for key in required_fields if key in patch and patch[key] is None]
    if cleared:
        raise ValueError(f"Required fields cannot be cleared: {', '.join(cleared)}")


class MutationCoordinator:
    """
    The only component that talks to storage.

    It owns the EntryIndex: load() replaces it wholesale, and each mutation
    applies its own result to it in one step once storage has accepted the
    change. Nothing is written locally before storage answers, and a failed
    call leaves the index as it was.

    Results of calls that started under a session that is no longer active
    are never applied to the index.
    """

    def __init__(
        self,
        storage: StorageClient,
        session: Optional[Session] = None,
        index: Optional[EntryIndex] = None,
    ) -> None:
        self._storage = storage
        self._session = session
        self.index = index if index is not None else EntryIndex()
        self.status: LoadStatus = "idle"
        self.error: Optional[str] = None
        self._load_task: Optional[asyncio.Task[None]] = None
        self._load_user_id: Optional[str] = None

    # ─────────────────────────────────────────────────────────────
    # Session
    # ─────────────────────────────────────────────────────────────

    @property
    def session(self) -> Optional[Session]:
        return self._session

    def sign_in(self, session: Session) -> None:
        if self._session is not None and self._session["user_id"] != session["user_id"]:
            self.index.clear()
            self.status = "idle"
            self.error = None
        self._session = session

    def sign_out(self) -> None:
        self._session = None
        self.index.clear()
        self.status = "idle"
        self.error = None

    def __require_user_id(self) -> str:
        if self._session is None:
            raise NotAuthenticated()
        return self._session["user_id"]

    def __is_current(self, user_id: str) -> bool:
        return self._session is not None and self._session["user_id"] == user_id

    async def __remote(self, call: Awaitable[T]) -> T:
        """Await a storage call, reporting timeouts as RemoteError."""
        try:
            return await call
        except asyncio.TimeoutError as e:
            raise RemoteError("Request timed out") from e

    # ─────────────────────────────────────────────────────────────
    # Load
    # ─────────────────────────────────────────────────────────────

    async def load(self, user_id: Optional[str] = None) -> None:
        """
        Fetch entries and track types together and replace the index.

        Calls made for the same user while a load is in flight wait for that
        same load. On any failure the previous index is kept, status becomes
        "failed" and the RemoteError propagates.
        """
        session_user_id = self.__require_user_id()
        if user_id is not None and user_id != session_user_id:
            raise NotAuthenticated(
                f"Cannot load data for {user_id} while signed in as {session_user_id}"
            )

        if (
            self._load_task is None
            or self._load_task.done()
            or self._load_user_id != session_user_id
        ):
            self._load_task = asyncio.create_task(self.__load(session_user_id))
            self._load_user_id = session_user_id
        await asyncio.shield(self._load_task)

    async def __fetch(self, user_id: str) -> tuple[list[Entry], list[TrackType]]:
        # Both requests always run to completion; either failing fails the pair
        results = await asyncio.gather(
            self.__remote(self._storage.fetch_entries(user_id)),
            self.__remote(self._storage.fetch_track_types(user_id)),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        entries, track_types = results
        return cast(list[Entry], entries), cast(list[TrackType], track_types)

    async def __load(self, user_id: str) -> None:
        self.status = "loading"
        self.error = None
        log.info("Loading entries and track types for %s", user_id)
        try:
            entries, track_types = await self.__fetch(user_id)
            track_types = await self.__remove_legacy_defaults(user_id, track_types)
        except RemoteError as e:
            if self.__is_current(user_id):
                self.status = "failed"
                self.error = e.message
            log.error("Load failed for %s: %s", user_id, e.message)
            raise
        except Exception as e:
            if self.__is_current(user_id):
                self.status = "failed"
                self.error = str(e)
            log.exception("Load failed for %s", user_id)
            raise

        if not self.__is_current(user_id):
            log.info("Discarding data loaded for %s, the session changed", user_id)
            return

        self.index.rebuild(entries, track_types)
        self.status = "loaded"
        log.info(
            "Loaded %d entries and %d track types for %s",
            len(entries),
            len(track_types),
            user_id,
        )

    async def __remove_legacy_defaults(
        self, user_id: str, track_types: list[TrackType]
    ) -> list[TrackType]:
        """Delete the three auto-seeded track types of an earlier version, once."""
        if not is_legacy_default_set(track_types):
            return track_types
        log.info("Removing legacy default track types for %s", user_id)
        for track_type in track_types:
            await self.__remote(self._storage.delete_track_type(user_id, track_type["id"]))
        return []

    # ─────────────────────────────────────────────────────────────
    # Entries
    # ─────────────────────────────────────────────────────────────

    async def add_entry(self, new_entry: NewEntry) -> Entry:
        user_id = self.__require_user_id()
        parse_date(new_entry["date"])

        try:
            created = await self.__remote(self._storage.create_entry(user_id, new_entry))
        except RemoteError as e:
            log.error("Adding entry on %s failed: %s", new_entry["date"], e.message)
            raise

        if self.__is_current(user_id):
            self.index.insert_entry(created)
        log.debug("Added entry %s on %s", created["id"], created["date"])
        return created

    async def update_entry(self, id: EntityId, patch: EntryPatch) -> Entry:
        """
        Change only the fields present in patch; a field set to None is cleared.

        Raises NotFound when the entry is unknown locally or storage has no
        such row.
        """
        user_id = self.__require_user_id()
        validate_patch(cast(dict[str, Any], patch), ENTRY_FIELDS, ENTRY_REQUIRED_FIELDS)
        if "date" in patch:
            parse_date(patch["date"])

        current = self.index.entry(id)
        if current is None:
            raise NotFound("Entry", id)
        if not patch:
            return current

        try:
            updated = await self.__remote(self._storage.patch_entry(user_id, id, patch))
        except RemoteError as e:
            log.error("Updating entry %s failed: %s", id, e.message)
            raise
        if updated is None:
            raise NotFound("Entry", id)

        if self.__is_current(user_id) and not self.index.replace_entry(updated):
            # Removed locally while the request was in flight
            log.debug("Entry %s updated remotely but no longer indexed", id)
        return updated

    async def delete_entry(self, id: EntityId) -> None:
        """Delete an entry. Unknown or already deleted ids succeed as no-ops."""
        user_id = self.__require_user_id()
        try:
            await self.__remote(self._storage.delete_entry(user_id, id))
        except NotFound:
            log.debug("Entry %s was already deleted", id)
        except RemoteError as e:
            log.error("Deleting entry %s failed: %s", id, e.message)
            raise
        if self.__is_current(user_id):
            self.index.remove_entry(id)

    # ─────────────────────────────────────────────────────────────
    # Track types
    # ─────────────────────────────────────────────────────────────

    async def add_track_type(self, new_track_type: NewTrackType) -> TrackType:
        user_id = self.__require_user_id()
        if not new_track_type["label"].strip():
            raise ValueError("Track type label must not be empty")

        try:
            created = await self.__remote(
                self._storage.create_track_type(user_id, new_track_type)
            )
        except RemoteError as e:
            log.error(
                "Adding track type %s failed: %s", new_track_type["label"], e.message
            )
            raise

        if self.__is_current(user_id):
            self.index.append_track_type(created)
        return created

    async def update_track_type(self, id: EntityId, patch: TrackTypePatch) -> TrackType:
        user_id = self.__require_user_id()
        validate_patch(
            cast(dict[str, Any], patch), TRACK_TYPE_FIELDS, TRACK_TYPE_REQUIRED_FIELDS
        )
        if "label" in patch and not patch["label"].strip():
            raise ValueError("Track type label must not be empty")

        current = self.index.track_type(id)
        if current is None:
            raise NotFound("Track type", id)
        if not patch:
            return current

        try:
            updated = await self.__remote(
                self._storage.patch_track_type(user_id, id, patch)
            )
        except RemoteError as e:
            log.error("Updating track type %s failed: %s", id, e.message)
            raise
        if updated is None:
            raise NotFound("Track type", id)

        if self.__is_current(user_id):
            self.index.replace_track_type(updated)
        return updated

    async def delete_track_type(self, id: EntityId) -> bool:
        """
        Delete a track type. Returns False without touching storage when it is
        the user's last remaining track type or is not known.
        """
        user_id = self.__require_user_id()
        if self.index.track_type(id) is None:
            log.debug("Track type %s is not loaded, nothing to delete", id)
            return False
        if self.index.track_type_count <= 1:
            log.info("Refusing to delete %s, the last remaining track type", id)
            return False

        try:
            await self.__remote(self._storage.delete_track_type(user_id, id))
        except NotFound:
            log.debug("Track type %s was already deleted", id)
        except RemoteError as e:
            log.error("Deleting track type %s failed: %s", id, e.message)
            raise

        if self.__is_current(user_id):
            self.index.remove_track_type(id)
        return True

    # ─────────────────────────────────────────────────────────────
    # Export
    # ─────────────────────────────────────────────────────────────

    def export_snapshot(self) -> ExportSnapshot:
        return build_export_snapshot(self.index.entries, self.index.track_types)
