# SPDX-License-Identifier: MIT

from lifetrack.model.entry import NewEntry


def get_entry_template() -> NewEntry:
    return {
        "date": "",  # Must be set
        "track_type_id": "",  # Must be set
        "value": None,
        "note": None,
        "metadata": None,
    }
