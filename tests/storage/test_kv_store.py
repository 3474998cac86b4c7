"""Tests for the key-value stores backing LocalAdapter."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from crabcms.storage.errors import CorruptDataError, StorageUnavailableError
from crabcms.storage.kv import JsonFileKeyValueStore, MemoryKeyValueStore


class TestMemoryKeyValueStore:
    def test_get_missing(self):
        assert MemoryKeyValueStore().get_item("k") is None

    def test_set_get_remove(self):
        store = MemoryKeyValueStore()
        store.set_item("k", "v")
        assert store.get_item("k") == "v"
        store.remove_item("k")
        assert store.get_item("k") is None

    def test_remove_missing_is_noop(self):
        store = MemoryKeyValueStore({"a": "1"})
        store.remove_item("b")
        assert store.keys() == ["a"]

    def test_initial_is_copied(self):
        initial = {"a": "1"}
        store = MemoryKeyValueStore(initial)
        store.set_item("b", "2")
        assert initial == {"a": "1"}


class TestJsonFileKeyValueStore:
    def test_missing_file_is_empty(self, tmp_path: Path):
        store = JsonFileKeyValueStore(tmp_path / "kv.json")
        assert store.keys() == []
        assert not (tmp_path / "kv.json").exists()

    def test_writes_after_each_mutation(self, tmp_path: Path):
        path = tmp_path / "nested" / "kv.json"
        store = JsonFileKeyValueStore(path)
        store.set_item("a", "1")
        assert json.loads(path.read_text(encoding="utf-8")) == {"a": "1"}

        store.remove_item("a")
        assert json.loads(path.read_text(encoding="utf-8")) == {}

    def test_reopen_reads_file(self, tmp_path: Path):
        path = tmp_path / "kv.json"
        JsonFileKeyValueStore(path).set_item("a", "hello")
        assert JsonFileKeyValueStore(path).get_item("a") == "hello"

    def test_empty_file_is_empty_store(self, tmp_path: Path):
        path = tmp_path / "kv.json"
        path.write_text("", encoding="utf-8")
        assert JsonFileKeyValueStore(path).get_item("a") is None

    def test_corrupt_file_raises(self, tmp_path: Path):
        path = tmp_path / "kv.json"
        path.write_text("{broken", encoding="utf-8")
        with pytest.raises(CorruptDataError):
            JsonFileKeyValueStore(path).get_item("a")

    def test_non_string_values_raise(self, tmp_path: Path):
        path = tmp_path / "kv.json"
        path.write_text('{"a": 1}', encoding="utf-8")
        with pytest.raises(CorruptDataError):
            JsonFileKeyValueStore(path).keys()

    def test_unreadable_path_raises(self, tmp_path: Path):
        # A directory where the file should be cannot be read as text.
        path = tmp_path / "kv.json"
        path.mkdir()
        with pytest.raises(StorageUnavailableError):
            JsonFileKeyValueStore(path).get_item("a")

    def test_failed_write_keeps_previous_value(self, tmp_path: Path):
        path = tmp_path / "kv.json"
        store = JsonFileKeyValueStore(path)
        store.set_item("a", "old")

        with patch.object(Path, "write_text", side_effect=OSError("disk full")):
            with pytest.raises(StorageUnavailableError):
                store.set_item("a", "new")

        assert store.get_item("a") == "old"
        assert json.loads(path.read_text(encoding="utf-8")) == {"a": "old"}

    def test_failed_remove_keeps_key(self, tmp_path: Path):
        store = JsonFileKeyValueStore(tmp_path / "kv.json")
        store.set_item("a", "1")

        with patch.object(Path, "write_text", side_effect=OSError("read-only")):
            with pytest.raises(StorageUnavailableError):
                store.remove_item("a")

        assert store.get_item("a") == "1"
