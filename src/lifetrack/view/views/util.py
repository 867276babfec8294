# SPDX-License-Identifier: MIT

from typing import Optional

from rich.text import Text

from lifetrack.color import MUTED_COLOR, is_hex_color
from lifetrack.model.track_type import TrackType

BADGE = "●"


def track_type_style(track_type: Optional[TrackType]) -> str:
    if track_type is None or not is_hex_color(track_type["color"]):
        return MUTED_COLOR
    return track_type["color"]


def track_type_label(track_type: Optional[TrackType]) -> Text:
    if track_type is None:
        return Text("(deleted type)", style=MUTED_COLOR)
    return Text(track_type["label"], style=track_type_style(track_type))


def format_metadata(metadata: Optional[dict[str, str]]) -> str:
    if not metadata:
        return ""
    return ", ".join(f"{key}={value}" for key, value in metadata.items())


def short_id(id: str) -> str:
    return id[:8]
