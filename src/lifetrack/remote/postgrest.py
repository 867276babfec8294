# SPDX-License-Identifier: MIT

import asyncio
import logging
from typing import Any, Optional

import requests

from lifetrack.errors import RemoteError
from lifetrack.model.entity_id import EntityId
from lifetrack.model.entry import Entry, NewEntry
from lifetrack.model.patch import EntryPatch, TrackTypePatch
from lifetrack.model.track_type import NewTrackType, TrackType
from lifetrack.remote.base import StorageClient
from lifetrack.remote.rows import (
    ENTRY_COLUMNS,
    TRACK_TYPE_COLUMNS,
    entry_from_row,
    track_type_from_row,
)

log = logging.getLogger(__name__)

ENTRIES_TABLE = "entries"
TRACK_TYPES_TABLE = "track_types"


class PostgrestStorageClient(StorageClient):
    """
    Storage client for a hosted backend exposing the entries and track_types
    tables over a PostgREST API with row-level security.

    requests is blocking, so each call runs in a worker thread.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        access_token: Optional[str] = None,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.access_token = access_token
        self.timeout = timeout
        self._session = session if session is not None else requests.Session()

    def __headers(self) -> dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.access_token or self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Prefer": "return=representation",
        }

    def _request(
        self,
        method: str,
        table: str,
        params: dict[str, str],
        payload: Optional[Any] = None,
    ) -> list[dict[str, Any]]:
        url = f"{self.base_url}/rest/v1/{table}"
        log.debug("%s %s %s", method, url, params)
        try:
            response = self._session.request(
                method,
                url,
                params=params,
                json=payload,
                headers=self.__headers(),
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise RemoteError(f"Request to {table} timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise RemoteError(f"Request to {table} failed: {e}") from e

        if response.status_code >= 400:
            raise RemoteError(self.__error_message(response), status=response.status_code)

        if not response.content:
            return []
        try:
            body = response.json()
        except ValueError as e:
            raise RemoteError(f"Invalid response from {table}: {e}") from e
        if isinstance(body, dict):
            return [body]
        return body

    def __error_message(self, response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        if isinstance(body, dict):
            message = body.get("message") or body.get("error_description") or body.get("error")
            if message:
                return str(message)
        return f"HTTP {response.status_code}"

    async def __call(
        self,
        method: str,
        table: str,
        params: dict[str, str],
        payload: Optional[Any] = None,
    ) -> list[dict[str, Any]]:
        return await asyncio.to_thread(self._request, method, table, params, payload)

    # ─────────────────────────────────────────────────────────────
    # Entries
    # ─────────────────────────────────────────────────────────────

    async def fetch_entries(self, user_id: str) -> list[Entry]:
        rows = await self.__call(
            "GET",
            ENTRIES_TABLE,
            {
                "select": ",".join(ENTRY_COLUMNS),
                "user_id": f"eq.{user_id}",
                "order": "date.asc",
            },
        )
        return [entry_from_row(row) for row in rows]

    async def create_entry(self, user_id: str, entry: NewEntry) -> Entry:
        payload = {
            "user_id": user_id,
            "date": entry["date"],
            "track_type_id": entry["track_type_id"],
            "value": entry["value"],
            "note": entry["note"],
            "metadata": entry["metadata"],
        }
        rows = await self.__call(
            "POST", ENTRIES_TABLE, {"select": ",".join(ENTRY_COLUMNS)}, payload
        )
        if not rows:
            raise RemoteError("Backend returned no row for the created entry")
        return entry_from_row(rows[0])

    async def patch_entry(
        self, user_id: str, id: EntityId, patch: EntryPatch
    ) -> Optional[Entry]:
        rows = await self.__call(
            "PATCH",
            ENTRIES_TABLE,
            {
                "select": ",".join(ENTRY_COLUMNS),
                "id": f"eq.{id}",
                "user_id": f"eq.{user_id}",
            },
            dict(patch),
        )
        if not rows:
            return None
        return entry_from_row(rows[0])

    async def delete_entry(self, user_id: str, id: EntityId) -> None:
        await self.__call(
            "DELETE",
            ENTRIES_TABLE,
            {"id": f"eq.{id}", "user_id": f"eq.{user_id}"},
        )

    # ─────────────────────────────────────────────────────────────
    # Track types
    # ─────────────────────────────────────────────────────────────

    async def fetch_track_types(self, user_id: str) -> list[TrackType]:
        rows = await self.__call(
            "GET",
            TRACK_TYPES_TABLE,
            {"select": ",".join(TRACK_TYPE_COLUMNS), "user_id": f"eq.{user_id}"},
        )
        return [track_type_from_row(row) for row in rows]

    async def create_track_type(
        self, user_id: str, track_type: NewTrackType
    ) -> TrackType:
        payload = {
            "user_id": user_id,
            "label": track_type["label"],
            "color": track_type["color"],
            "value_type": track_type["value_type"],
            "value_unit": track_type["value_unit"],
            "duration_unit": track_type["duration_unit"],
            "metadata": track_type["metadata"],
        }
        rows = await self.__call(
            "POST", TRACK_TYPES_TABLE, {"select": ",".join(TRACK_TYPE_COLUMNS)}, payload
        )
        if not rows:
            raise RemoteError("Backend returned no row for the created track type")
        return track_type_from_row(rows[0])

    async def patch_track_type(
        self, user_id: str, id: EntityId, patch: TrackTypePatch
    ) -> Optional[TrackType]:
        rows = await self.__call(
            "PATCH",
            TRACK_TYPES_TABLE,
            {
                "select": ",".join(TRACK_TYPE_COLUMNS),
                "id": f"eq.{id}",
                "user_id": f"eq.{user_id}",
            },
            dict(patch),
        )
        if not rows:
            return None
        return track_type_from_row(rows[0])

    async def delete_track_type(self, user_id: str, id: EntityId) -> None:
        await self.__call(
            "DELETE",
            TRACK_TYPES_TABLE,
            {"id": f"eq.{id}", "user_id": f"eq.{user_id}"},
        )
