# SPDX-License-Identifier: MIT

import logging
from pathlib import Path
from typing import Any, Optional, cast

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from lifetrack.errors import RemoteError
from lifetrack.model.entity_id import EntityId, generate_entity_id
from lifetrack.model.entry import Entry, NewEntry
from lifetrack.model.patch import EntryPatch, TrackTypePatch
from lifetrack.model.track_type import NewTrackType, TrackType
from lifetrack.remote.base import StorageClient
from lifetrack.remote.rows import entry_from_row, track_type_from_row

log = logging.getLogger(__name__)

ENTRIES_DIR_NAME = "entries"
TRACK_TYPES_DIR_NAME = "track_types"


def is_safe_file_name(name: str) -> bool:
    """True when name can be used as a single path component under the data path."""
    return (
        isinstance(name, str)
        and bool(name)
        and "/" not in name
        and "\\" not in name
        and name not in (".", "..")
    )


class LocalStorageClient(StorageClient):
    """
    Storage client keeping one YAML file per record on disk:

        <data_path>/<user_id>/entries/<id>.yaml
        <data_path>/<user_id>/track_types/<id>.yaml

    Ids are assigned here, the same way a hosted backend would assign them.
    """

    def __init__(self, data_path: Path) -> None:
        self.data_path = data_path

    def __table_dir(self, user_id: str, table: str) -> Path:
        if not is_safe_file_name(user_id):
            raise RemoteError(f"Invalid user id: {user_id!r}")
        table_dir = self.data_path / user_id / table
        table_dir.mkdir(parents=True, exist_ok=True)
        return table_dir

    def __row_path(self, user_id: str, table: str, id: EntityId) -> Path:
        if not is_safe_file_name(id):
            raise RemoteError(f"Invalid id: {id!r}")
        return self.__table_dir(user_id, table) / f"{id}.yaml"

    def __read_rows(self, user_id: str, table: str) -> list[dict[str, Any]]:
        rows: list[dict[str, Any]] = []
        for file_path in sorted(self.__table_dir(user_id, table).iterdir()):
            if file_path.suffix != ".yaml":
                continue
            try:
                raw_row = load(file_path.read_text(), Loader=Loader)
            except (OSError, YAMLError) as e:
                raise RemoteError(f"Could not read {file_path}: {e}") from e
            if raw_row is not None:
                rows.append(raw_row)
        return rows

    def __read_row(
        self, user_id: str, table: str, id: EntityId
    ) -> Optional[dict[str, Any]]:
        file_path = self.__row_path(user_id, table, id)
        if not file_path.is_file():
            return None
        try:
            raw_row = load(file_path.read_text(), Loader=Loader)
        except (OSError, YAMLError) as e:
            raise RemoteError(f"Could not read {file_path}: {e}") from e
        if not isinstance(raw_row, dict):
            raise RemoteError(f"Malformed {table} row in {file_path}")
        return cast(dict[str, Any], raw_row)

    def __write_row(self, user_id: str, table: str, row: dict[str, Any]) -> None:
        file_path = self.__row_path(user_id, table, row["id"])
        try:
            file_path.write_text(dump(row, Dumper=Dumper, sort_keys=False))
        except OSError as e:
            raise RemoteError(f"Could not write {file_path}: {e}") from e

    def __delete_row(self, user_id: str, table: str, id: EntityId) -> None:
        file_path = self.__row_path(user_id, table, id)
        try:
            file_path.unlink(missing_ok=True)
        except OSError as e:
            raise RemoteError(f"Could not delete {file_path}: {e}") from e

    def __patch_row(
        self,
        user_id: str,
        table: str,
        id: EntityId,
        patch: dict[str, Any],
    ) -> Optional[dict[str, Any]]:
        row = self.__read_row(user_id, table, id)
        if row is None:
            return None
        row.update(patch)
        self.__write_row(user_id, table, row)
        return row

    # ─────────────────────────────────────────────────────────────
    # Entries
    # ─────────────────────────────────────────────────────────────

    async def fetch_entries(self, user_id: str) -> list[Entry]:
        entries = [
            entry_from_row(row) for row in self.__read_rows(user_id, ENTRIES_DIR_NAME)
        ]
        return sorted(entries, key=lambda entry: entry["date"])

    async def create_entry(self, user_id: str, entry: NewEntry) -> Entry:
        row = cast(dict[str, Any], dict(entry))
        row["id"] = generate_entity_id()
        self.__write_row(user_id, ENTRIES_DIR_NAME, row)
        log.debug("Created entry %s for %s", row["id"], user_id)
        return entry_from_row(row)

    async def patch_entry(
        self, user_id: str, id: EntityId, patch: EntryPatch
    ) -> Optional[Entry]:
        row = self.__patch_row(user_id, ENTRIES_DIR_NAME, id, dict(patch))
        return entry_from_row(row) if row is not None else None

    async def delete_entry(self, user_id: str, id: EntityId) -> None:
        self.__delete_row(user_id, ENTRIES_DIR_NAME, id)

    # ─────────────────────────────────────────────────────────────
    # Track types
    # ─────────────────────────────────────────────────────────────

    async def fetch_track_types(self, user_id: str) -> list[TrackType]:
        return [
            track_type_from_row(row)
            for row in self.__read_rows(user_id, TRACK_TYPES_DIR_NAME)
        ]

    async def create_track_type(
        self, user_id: str, track_type: NewTrackType
    ) -> TrackType:
        row = cast(dict[str, Any], dict(track_type))
        row["id"] = generate_entity_id()
        self.__write_row(user_id, TRACK_TYPES_DIR_NAME, row)
        log.debug("Created track type %s for %s", row["id"], user_id)
        return track_type_from_row(row)

    async def patch_track_type(
        self, user_id: str, id: EntityId, patch: TrackTypePatch
    ) -> Optional[TrackType]:
        row = self.__patch_row(user_id, TRACK_TYPES_DIR_NAME, id, dict(patch))
        return track_type_from_row(row) if row is not None else None

    async def delete_track_type(self, user_id: str, id: EntityId) -> None:
        self.__delete_row(user_id, TRACK_TYPES_DIR_NAME, id)
