"""Tests for the SQLite schema and key-value store."""

import sqlite3

import pytest

from superstore.db.schema import _SCHEMA_VERSION, ensure_schema
from superstore.db.store import STORAGE_KEYS, KeyValueStore


@pytest.fixture
def store(tmp_path):
    kv = KeyValueStore(db_path=tmp_path / "test.db")
    yield kv
    kv.close()


def test_ensure_schema_creates_tables(tmp_path):
    conn = ensure_schema(tmp_path / "test.db")
    tables = {
        row["name"]
        for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
    }
    assert {"kv_store", "schema_version"} <= tables
    conn.close()


def test_ensure_schema_creates_parent_dirs(tmp_path):
    db_path = tmp_path / "sub" / "dir" / "test.db"
    conn = ensure_schema(db_path)
    assert db_path.exists()
    conn.close()


def test_ensure_schema_idempotent(tmp_path):
    db_path = tmp_path / "test.db"
    ensure_schema(db_path).close()
    conn = ensure_schema(db_path)
    rows = conn.execute("SELECT version FROM schema_version").fetchall()
    assert [r["version"] for r in rows] == [_SCHEMA_VERSION]
    conn.close()


def test_storage_keys():
    assert STORAGE_KEYS["employees"] == "keiths-employees"
    assert STORAGE_KEYS["items"] == "keiths-inventory-items"
    assert STORAGE_KEYS["waste"] == "keiths-waste-entries"


class TestKeyValueStore:
    def test_missing_key_returns_default(self, store):
        assert store.load("nope") is None
        assert store.load("nope", []) == []

    def test_save_and_load(self, store):
        store.save("k", {"Hot Dog": 25, "Jalapeños": 3})
        assert store.load("k") == {"Hot Dog": 25, "Jalapeños": 3}

    def test_save_replaces_whole_value(self, store):
        store.save("k", [1, 2, 3])
        store.save("k", [4])
        assert store.load("k") == [4]

    def test_delete_and_keys(self, store):
        store.save("b", 1)
        store.save("a", 2)
        assert store.keys() == ["a", "b"]
        store.delete("a")
        assert store.keys() == ["b"]

    def test_invalid_json_returns_default(self, tmp_path, caplog):
        db_path = tmp_path / "test.db"
        conn = ensure_schema(db_path)
        conn.execute("INSERT INTO kv_store (key, value) VALUES ('bad', '{not json')")
        conn.commit()
        conn.close()

        kv = KeyValueStore(db_path)
        try:
            assert kv.load("bad", "fallback") == "fallback"
        finally:
            kv.close()
        assert "not valid JSON" in caplog.text

    def test_persists_across_instances(self, tmp_path):
        db_path = tmp_path / "test.db"
        first = KeyValueStore(db_path)
        first.save("k", "v")
        first.close()

        second = KeyValueStore(db_path)
        assert second.load("k") == "v"
        second.close()

    def test_close_is_idempotent(self, store):
        store.load("k")
        store.close()
        store.close()


def test_value_stored_as_json_text(tmp_path):
    kv = KeyValueStore(tmp_path / "test.db")
    kv.save("k", {"a": 1})
    kv.close()

    conn = sqlite3.connect(str(tmp_path / "test.db"))
    [(value,)] = conn.execute("SELECT value FROM kv_store WHERE key = 'k'").fetchall()
    conn.close()
    assert value == '{"a": 1}'
