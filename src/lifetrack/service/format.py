# SPDX-License-Identifier: MIT

from typing import Optional

from lifetrack.model.entry import Entry
from lifetrack.model.track_type import TrackType


def format_number(value: float) -> str:
    """Drop a trailing '.0' so whole numbers print as integers."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def value_input_label(track_type: TrackType) -> str:
    if track_type["value_type"] == "duration":
        unit = "hours" if track_type["duration_unit"] == "hours" else "minutes"
        return f"Duration ({unit})"
    if track_type["value_type"] == "count":
        if track_type["value_unit"]:
            return f"Count ({track_type['value_unit']})"
        return "Count"
    return "Value"


def format_entry_value(entry: Entry, track_type: Optional[TrackType]) -> Optional[str]:
    """
    Display form of an entry's value, e.g. "30 min", "1.5 hr", "5 cigarettes".

    Returns None when the entry has no value.
    """
    if entry["value"] is None:
        return None
    number = format_number(entry["value"])
    if track_type is None:
        return number
    if track_type["value_type"] == "duration":
        unit = "hr" if track_type["duration_unit"] == "hours" else "min"
        return f"{number} {unit}"
    if track_type["value_type"] == "count" and track_type["value_unit"]:
        return f"{number} {track_type['value_unit']}"
    return number
