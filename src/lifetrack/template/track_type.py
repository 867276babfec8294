# SPDX-License-Identifier: MIT

from lifetrack.model.track_type import NewTrackType


def get_track_type_template() -> NewTrackType:
    return {
        "label": "",
        "color": "#3b82f6",
        "value_type": "count",
        "value_unit": None,
        "duration_unit": None,
        "metadata": None,
    }
