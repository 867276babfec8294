# SPDX-License-Identifier: MIT

from typing import Any, Optional

from lifetrack.errors import RemoteError
from lifetrack.model.entry import Entry
from lifetrack.model.track_type import TrackType

ENTRY_COLUMNS = ("id", "date", "track_type_id", "value", "note", "metadata")
TRACK_TYPE_COLUMNS = (
    "id",
    "label",
    "color",
    "value_type",
    "value_unit",
    "duration_unit",
    "metadata",
)


def __normalize_metadata(metadata: Optional[dict[str, Any]]) -> Optional[dict[str, str]]:
    # Backends store an empty mapping and null interchangeably
    if not metadata:
        return None
    return {str(key): "" if value is None else str(value) for key, value in metadata.items()}


def entry_from_row(row: dict[str, Any]) -> Entry:
    """Raises RemoteError when the row is not a mapping with the entry columns."""
    try:
        value = row.get("value")
        return {
            "id": str(row["id"]),
            "date": str(row["date"]),
            "track_type_id": str(row["track_type_id"]),
            "value": float(value) if value is not None else None,
            "note": row.get("note"),
            "metadata": __normalize_metadata(row.get("metadata")),
        }
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise RemoteError(f"Malformed entries row: {row!r} ({e!r})") from e


def track_type_from_row(row: dict[str, Any]) -> TrackType:
    """Raises RemoteError when the row is not a mapping with the track type columns."""
    try:
        return {
            "id": str(row["id"]),
            "label": str(row["label"]),
            "color": str(row["color"]),
            "value_type": row["value_type"],
            "value_unit": row.get("value_unit"),
            "duration_unit": row.get("duration_unit"),
            "metadata": __normalize_metadata(row.get("metadata")),
        }
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise RemoteError(f"Malformed track_types row: {row!r} ({e!r})") from e
