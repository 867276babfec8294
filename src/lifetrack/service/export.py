# SPDX-License-Identifier: MIT

import json
from pathlib import Path
from typing import Any, Optional, cast

import pendulum

from lifetrack import time
from lifetrack.model.entry import Entry
from lifetrack.model.export import ExportedEntry, ExportedTrackType, ExportSnapshot
from lifetrack.model.track_type import TrackType

# snake_case record key -> exported camelCase key
ENTRY_EXPORT_KEYS = {
    "id": "id",
    "date": "date",
    "track_type_id": "trackTypeId",
    "value": "value",
    "note": "note",
    "metadata": "metadata",
}
TRACK_TYPE_EXPORT_KEYS = {
    "id": "id",
    "label": "label",
    "color": "color",
    "value_type": "valueType",
    "value_unit": "valueUnit",
    "duration_unit": "durationUnit",
    "metadata": "metadata",
}


def __to_exported(record: dict[str, Any], keys: dict[str, str]) -> dict[str, Any]:
    # Unset optional fields are omitted rather than written as null
    return {
        exported_key: record[key]
        for key, exported_key in keys.items()
        if record.get(key) is not None
    }


def __from_exported(record: dict[str, Any], keys: dict[str, str]) -> dict[str, Any]:
    return {key: record.get(exported_key) for key, exported_key in keys.items()}


def build_export_snapshot(
    entries: list[Entry],
    track_types: list[TrackType],
    exported_at: Optional[pendulum.DateTime] = None,
) -> ExportSnapshot:
    if exported_at is None:
        exported_at = time.now_utc()
    return {
        "entries": [
            cast(ExportedEntry, __to_exported(cast(dict[str, Any], entry), ENTRY_EXPORT_KEYS))
            for entry in entries
        ],
        "trackTypes": [
            cast(
                ExportedTrackType,
                __to_exported(cast(dict[str, Any], track_type), TRACK_TYPE_EXPORT_KEYS),
            )
            for track_type in track_types
        ],
        "exportedAt": time.datetime_to_iso_str(exported_at),
    }


def read_export_snapshot(
    snapshot: dict[str, Any],
) -> tuple[list[Entry], list[TrackType]]:
    """Turn an exported document back into entry and track type records."""
    entries = [
        cast(Entry, __from_exported(raw_entry, ENTRY_EXPORT_KEYS))
        for raw_entry in snapshot.get("entries", [])
    ]
    track_types = [
        cast(TrackType, __from_exported(raw_track_type, TRACK_TYPE_EXPORT_KEYS))
        for raw_track_type in snapshot.get("trackTypes", [])
    ]
    return entries, track_types


def export_file_name(reference: pendulum.Date) -> str:
    return f"life-tracker-export-{time.date_key(reference)}.json"


def write_export_file(snapshot: ExportSnapshot, path: Path) -> Path:
    """Write the snapshot as indented JSON. A directory path gets the default file name."""
    if path.is_dir():
        path = path / export_file_name(time.today())
    path.write_text(json.dumps(snapshot, indent=2))
    return path
