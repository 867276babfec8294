# SPDX-License-Identifier: MIT

from typing import Any, TypedDict

# Keys are camelCase so files can be re-imported by either client.
ExportedEntry = dict[str, Any]
ExportedTrackType = dict[str, Any]

ExportSnapshot = TypedDict(
    "ExportSnapshot",
    {
        "entries": list[ExportedEntry],
        "trackTypes": list[ExportedTrackType],
        "exportedAt": str,  # ISO-8601
    },
)
