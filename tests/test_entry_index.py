from lifetrack.repository.entry_index import EntryIndex

from conftest import make_entry, make_track_type


def test_rebuild_sorts_entries_by_date(index):
    dates = [entry["date"] for entry in index.entries]
    assert dates == sorted(dates)
    assert index.entry_count == 6
    assert index.track_type_count == 3


def test_equal_dates_keep_stored_order(index):
    assert [entry["id"] for entry in index.entries_on("2024-03-05")] == ["e1", "e2", "e3"]


def test_rebuild_replaces_previous_state(index):
    index.rebuild([make_entry("x", "2020-01-01", "run")], [])
    assert [entry["id"] for entry in index.entries] == ["x"]
    assert index.track_type("run") is None
    assert index.entries_on("2024-03-05") == []


def test_lookups(index):
    assert index.entry("e4")["track_type_id"] == "meditate"
    assert index.entry("missing") is None
    assert index.track_type("read")["label"] == "Reading"
    assert index.earliest_date_key() == "2023-12-31"


def test_returned_records_are_copies(index):
    entry = index.entry("e1")
    entry["note"] = "changed"
    assert index.entry("e1")["note"] is None
    index.entries[0]["date"] = "1900-01-01"
    assert index.earliest_date_key() == "2023-12-31"


def test_entries_in_month_uses_prefix(index):
    assert [entry["id"] for entry in index.entries_in_month("2024-03")] == [
        "e1",
        "e2",
        "e3",
        "e4",
    ]
    assert [entry["id"] for entry in index.entries_in_month("2024-02")] == ["e5"]
    assert index.entries_in_month("2024-04") == []


def test_entries_since_and_count_since(index):
    assert [entry["id"] for entry in index.entries_since("2024-03-05")] == [
        "e1",
        "e2",
        "e3",
        "e4",
    ]
    assert index.count_since("run", "2024-01-01") == 2
    assert index.count_since("run", "0000-00-00") == 3
    assert index.count_since("unknown", "0000-00-00") == 0


def test_track_type_ids_on_keeps_repeats(index):
    assert index.track_type_ids_on("2024-03-05") == ["run", "read", "run"]
    assert index.track_type_ids_on("2024-03-06") == []


def test_insert_entry_keeps_order():
    index = EntryIndex()
    index.rebuild(
        [make_entry("a", "2024-01-01", "t"), make_entry("c", "2024-01-03", "t")],
        [make_track_type("t", "T")],
    )
    index.insert_entry(make_entry("b", "2024-01-03", "t"))
    index.insert_entry(make_entry("z", "2023-12-01", "t"))
    assert [entry["id"] for entry in index.entries] == ["z", "a", "c", "b"]
    assert index.entry("b") is not None


def test_replace_entry_moves_when_date_changes(index):
    moved = make_entry("e1", "2024-03-20", "run", 45)
    assert index.replace_entry(moved)
    assert [entry["id"] for entry in index.entries_on("2024-03-05")] == ["e2", "e3"]
    assert [entry["id"] for entry in index.entries_on("2024-03-20")] == ["e4", "e1"]
    assert index.entry("e1")["value"] == 45


def test_replace_entry_same_day_keeps_position(index):
    assert index.replace_entry(make_entry("e2", "2024-03-05", "read", 99))
    assert [entry["id"] for entry in index.entries_on("2024-03-05")] == ["e1", "e2", "e3"]


def test_replace_and_remove_unknown_entry(index):
    assert not index.replace_entry(make_entry("nope", "2024-01-01", "run"))
    assert not index.remove_entry("nope")
    assert index.entry_count == 6


def test_remove_entry(index):
    assert index.remove_entry("e3")
    assert index.track_type_ids_on("2024-03-05") == ["run", "read"]
    assert index.count_since("run", "0000-00-00") == 2


def test_track_type_writes(index):
    index.append_track_type(make_track_type("new", "New"))
    assert [t["id"] for t in index.track_types] == ["run", "read", "meditate", "new"]

    assert index.replace_track_type(make_track_type("new", "Renamed"))
    assert index.track_type("new")["label"] == "Renamed"

    assert index.remove_track_type("new")
    assert not index.remove_track_type("new")
    assert index.track_type_count == 3


def test_clear(index):
    index.clear()
    assert index.is_empty()
    assert index.earliest_date_key() is None
