"""Tests for the key-value storage backends."""

import json

from geocoin.systems.storage import InMemoryStore, JsonFileStore


class TestInMemoryStore:
    def test_get_set(self):
        s = InMemoryStore()
        assert s.get("1:2") is None
        s.set("1:2", "17")
        assert s.get("1:2") == "17"
        assert "1:2" in s
        assert "3:4" not in s

    def test_overwrite_and_keys(self):
        s = InMemoryStore({"a": "1"})
        s.set("b", "2")
        s.set("a", "3")
        assert s.keys() == ["a", "b"]
        assert s.get("a") == "3"

    def test_clear(self):
        s = InMemoryStore({"a": "1", "coin0": "0:0#1"})
        s.clear()
        assert s.keys() == []

    def test_delete(self):
        s = InMemoryStore({"a": "1", "b": "2"})
        s.delete("a")
        s.delete("missing")
        assert s.keys() == ["b"]

    def test_initial_dict_is_copied(self):
        initial = {"a": "1"}
        s = InMemoryStore(initial)
        s.set("b", "2")
        assert "b" not in initial


class TestJsonFileStore:
    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "state.json"
        s = JsonFileStore(path)
        s.set("5:5", "42")
        s.set("coin0", "5:5#42")

        reopened = JsonFileStore(path)
        assert reopened.get("5:5") == "42"
        assert reopened.get("coin0") == "5:5#42"
        assert json.loads(path.read_text(encoding="utf-8")) == {"5:5": "42", "coin0": "5:5#42"}

    def test_missing_file_starts_empty(self, tmp_path):
        s = JsonFileStore(tmp_path / "nested" / "state.json")
        assert s.keys() == []
        s.set("k", "v")
        assert (tmp_path / "nested" / "state.json").exists()

    def test_clear_is_persisted(self, tmp_path):
        path = tmp_path / "state.json"
        s = JsonFileStore(path)
        s.set("k", "v")
        s.clear()
        assert JsonFileStore(path).keys() == []

    def test_delete_is_persisted(self, tmp_path):
        path = tmp_path / "state.json"
        s = JsonFileStore(path)
        s.set("coin0", "1:1#0")
        s.set("coin1", "1:1#1")
        s.delete("coin1")
        assert JsonFileStore(path).keys() == ["coin0"]

    def test_corrupt_file_discarded(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("{not json", encoding="utf-8")
        s = JsonFileStore(path)
        assert s.keys() == []

    def test_non_object_discarded(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert JsonFileStore(path).keys() == []

    def test_no_temp_file_left_behind(self, tmp_path):
        path = tmp_path / "state.json"
        JsonFileStore(path).set("k", "v")
        assert [p.name for p in tmp_path.iterdir()] == ["state.json"]
