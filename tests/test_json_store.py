# ==============================================================================
# Tests for JsonSnapshotStore
# ==============================================================================
"""
Tests for the JSON file snapshot store.
"""

import json

from storefront.core.timestamps import parse_timestamp
from storefront.infrastructure.storage import JsonSnapshotStore


class TestLoad:
    """Tests for JsonSnapshotStore.load()."""

    def test_missing_file_is_empty(self, tmp_path):
        assert JsonSnapshotStore(tmp_path / "nope.json", "events").load() == []

    def test_malformed_file_is_empty(self, tmp_path):
        path = tmp_path / "traffic.json"
        path.write_text("{\"events\": [")
        assert JsonSnapshotStore(path, "events").load() == []

    def test_missing_key_is_empty(self, tmp_path):
        path = tmp_path / "traffic.json"
        path.write_text(json.dumps({"insights": [{"a": 1}]}))
        assert JsonSnapshotStore(path, "events").load() == []

    def test_non_list_value_is_empty(self, tmp_path):
        path = tmp_path / "traffic.json"
        path.write_text(json.dumps({"events": {"a": 1}}))
        assert JsonSnapshotStore(path, "events").load() == []

    def test_top_level_list_is_empty(self, tmp_path):
        path = tmp_path / "traffic.json"
        path.write_text(json.dumps([{"a": 1}]))
        assert JsonSnapshotStore(path, "events").load() == []

    def test_loads_records(self, tmp_path):
        path = tmp_path / "traffic.json"
        path.write_text(json.dumps({"events": [{"type": "pageView"}], "lastUpdated": "x"}))
        assert JsonSnapshotStore(path, "events").load() == [{"type": "pageView"}]


class TestSave:
    """Tests for JsonSnapshotStore.save()."""

    def test_writes_records_and_last_updated(self, tmp_path):
        path = tmp_path / "insights.json"
        store = JsonSnapshotStore(path, "insights")

        assert store.save([{"priority": "high"}]) is True

        text = path.read_text()
        data = json.loads(text)
        assert data["insights"] == [{"priority": "high"}]
        assert parse_timestamp(data["lastUpdated"]) is not None
        assert "\n  " in text  # pretty-printed

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "data" / "nested" / "traffic.json"
        assert JsonSnapshotStore(path, "events").save([]) is True
        assert path.exists()

    def test_replaces_previous_snapshot(self, tmp_path):
        store = JsonSnapshotStore(tmp_path / "traffic.json", "events")
        store.save([{"n": 1}, {"n": 2}])
        store.save([{"n": 3}])
        assert store.load() == [{"n": 3}]

    def test_no_temporary_files_left(self, tmp_path):
        store = JsonSnapshotStore(tmp_path / "traffic.json", "events")
        store.save([{"n": 1}])
        assert [p.name for p in tmp_path.iterdir()] == ["traffic.json"]

    def test_failure_returns_false(self, tmp_path):
        path = tmp_path / "traffic.json"
        path.mkdir()

        assert JsonSnapshotStore(path, "events").save([{"n": 1}]) is False
        assert path.is_dir()
        assert [p.name for p in tmp_path.iterdir()] == ["traffic.json"]

    def test_non_json_values_are_stringified(self, tmp_path):
        store = JsonSnapshotStore(tmp_path / "traffic.json", "events")
        assert store.save([{"tags": {"a"}}]) is True
        assert store.load() == [{"tags": "{'a'}"}]
