from lifetrack.service.format import format_entry_value, format_number, value_input_label
from lifetrack.service.legacy import is_legacy_default_set

from conftest import make_entry, make_track_type


def test_format_number():
    assert format_number(30.0) == "30"
    assert format_number(1.5) == "1.5"


def test_value_input_label():
    assert value_input_label(make_track_type("a", "A", value_type="duration")) == "Duration (minutes)"
    assert (
        value_input_label(make_track_type("a", "A", value_type="duration", duration_unit="hours"))
        == "Duration (hours)"
    )
    assert value_input_label(make_track_type("a", "A", value_unit="cigarettes")) == "Count (cigarettes)"
    assert value_input_label(make_track_type("a", "A")) == "Count"


def test_format_entry_value():
    duration = make_track_type("a", "A", value_type="duration")
    hours = make_track_type("b", "B", value_type="duration", duration_unit="hours")
    count = make_track_type("c", "C", value_unit="pages")

    assert format_entry_value(make_entry("1", "2024-01-01", "a", 30), duration) == "30 min"
    assert format_entry_value(make_entry("2", "2024-01-01", "b", 1.5), hours) == "1.5 hr"
    assert format_entry_value(make_entry("3", "2024-01-01", "c", 12), count) == "12 pages"
    assert format_entry_value(make_entry("4", "2024-01-01", "c"), count) is None
    assert format_entry_value(make_entry("5", "2024-01-01", "x", 2), None) == "2"


def test_is_legacy_default_set():
    legacy = [
        make_track_type("1", "Workout"),
        make_track_type("2", "Drinking"),
        make_track_type("3", "Smoking"),
    ]
    assert is_legacy_default_set(legacy)
    assert not is_legacy_default_set(legacy[:2])
    assert not is_legacy_default_set(legacy + [make_track_type("4", "Reading")])
    assert not is_legacy_default_set([])
