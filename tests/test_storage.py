"""Tests for the key-value stores."""

from __future__ import annotations

from cry_translator.storage import InMemoryStore, JsonFileStore, load_json_list, save_json_list


class TestInMemoryStore:
    def test_get_set_remove(self) -> None:
        store = InMemoryStore()
        assert store.get_item("k") is None
        store.set_item("k", "v")
        assert store.get_item("k") == "v"
        store.remove_item("k")
        assert store.get_item("k") is None

    def test_remove_missing_key(self) -> None:
        InMemoryStore().remove_item("missing")


class TestJsonFileStore:
    def test_persists_across_instances(self, tmp_path) -> None:
        path = tmp_path / "nested" / "store.json"
        JsonFileStore(path).set_item("k", "v")
        assert JsonFileStore(path).get_item("k") == "v"

    def test_missing_file_reads_empty(self, tmp_path) -> None:
        assert JsonFileStore(tmp_path / "store.json").get_item("k") is None

    def test_corrupt_file_reads_empty(self, tmp_path) -> None:
        path = tmp_path / "store.json"
        path.write_text("not json")
        assert JsonFileStore(path).get_item("k") is None

    def test_non_object_file_reads_empty(self, tmp_path) -> None:
        path = tmp_path / "store.json"
        path.write_text("[1, 2]")
        assert JsonFileStore(path).get_item("k") is None

    def test_remove(self, tmp_path) -> None:
        store = JsonFileStore(tmp_path / "store.json")
        store.set_item("a", "1")
        store.set_item("b", "2")
        store.remove_item("a")
        assert store.get_item("a") is None
        assert store.get_item("b") == "2"


class TestJsonListHelpers:
    def test_round_trip(self) -> None:
        store = InMemoryStore()
        save_json_list(store, "logs", [{"id": "1"}])
        assert load_json_list(store, "logs") == [{"id": "1"}]

    def test_missing(self) -> None:
        assert load_json_list(InMemoryStore(), "logs") == []

    def test_not_a_list(self) -> None:
        store = InMemoryStore()
        store.set_item("logs", '{"id": "1"}')
        assert load_json_list(store, "logs") == []

    def test_corrupt(self) -> None:
        store = InMemoryStore()
        store.set_item("logs", "[")
        assert load_json_list(store, "logs") == []
