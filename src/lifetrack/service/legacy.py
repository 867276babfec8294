# SPDX-License-Identifier: MIT

from lifetrack.model.track_type import TrackType

# Track types an earlier product version created for every new user.
LEGACY_DEFAULT_LABELS = frozenset({"Drinking", "Smoking", "Workout"})


def is_legacy_default_set(track_types: list[TrackType]) -> bool:
    """
    True when the user still has exactly the three auto-seeded track types,
    unrenamed and with nothing added.
    """
    if len(track_types) != len(LEGACY_DEFAULT_LABELS):
        return False
    labels = sorted(track_type["label"] for track_type in track_types)
    return labels == sorted(LEGACY_DEFAULT_LABELS)
