"""Tests for the file-backed key-value store."""

from storeorder.infrastructure.persistence.file_key_value_store import (
    FileKeyValueStore,
)


class TestFileKeyValueStore:

    def test_missing_key(self, tmp_path):
        store = FileKeyValueStore(tmp_path)
        assert store.get("products_cache_v2") is None

    def test_set_then_get(self, tmp_path):
        store = FileKeyValueStore(tmp_path)
        store.set("products_cache_v2", b'{"version": 1}')
        assert store.get("products_cache_v2") == b'{"version": 1}'
        assert (tmp_path / "products_cache_v2.json").exists()

    def test_overwrite_leaves_no_temp_file(self, tmp_path):
        store = FileKeyValueStore(tmp_path)
        store.set("order-drafts-storage", b"one")
        store.set("order-drafts-storage", b"two")
        assert store.get("order-drafts-storage") == b"two"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["order-drafts-storage.json"]

    def test_directory_created_lazily(self, tmp_path):
        directory = tmp_path / "nested" / "data"
        store = FileKeyValueStore(directory)
        assert not directory.exists()
        store.set("k", b"v")
        assert store.get("k") == b"v"

    def test_delete(self, tmp_path):
        store = FileKeyValueStore(tmp_path)
        store.set("k", b"v")
        store.delete("k")
        store.delete("k")
        assert store.get("k") is None

    def test_unsafe_key_stays_inside_directory(self, tmp_path):
        store = FileKeyValueStore(tmp_path / "data")
        store.set("../escape/key", b"v")
        assert store.get("../escape/key") == b"v"
        assert [p.parent for p in (tmp_path / "data").iterdir()] == [tmp_path / "data"]
        assert not (tmp_path / "escape").exists()

    def test_values_shared_between_instances(self, tmp_path):
        FileKeyValueStore(tmp_path).set("k", b"shared")
        assert FileKeyValueStore(tmp_path).get("k") == b"shared"
