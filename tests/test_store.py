"""Tests for the key-value store adapters."""
import pytest

from sat_ascent.store import (
    MemoryStore, MissingRecordError, SqliteStore, StoreReadError, init_db, get_connection,
    read_json, write_json,
)


def test_init_db_creates_table(tmp_db):
    init_db(tmp_db)
    conn = get_connection(tmp_db)
    tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    assert "kv_store" in tables
    conn.close()


def test_init_db_is_idempotent(tmp_db):
    init_db(tmp_db)
    init_db(tmp_db)  # should not raise


def test_sqlite_store_missing_key(tmp_db):
    store = SqliteStore(tmp_db)
    assert store.get("stats") is None


def test_sqlite_store_set_overwrites(tmp_db):
    store = SqliteStore(tmp_db)
    store.set("streak", b"one")
    store.set("streak", b"two")
    assert store.get("streak") == b"two"


def test_sqlite_store_survives_reopen(tmp_db):
    SqliteStore(tmp_db).set("dailyProgress", b'{"count": 3}')
    assert SqliteStore(tmp_db).get("dailyProgress") == b'{"count": 3}'


def test_memory_store_roundtrip():
    store = MemoryStore()
    store.set("k", b"v")
    assert store.get("k") == b"v"
    assert store.get("other") is None


def test_read_json_missing_raises():
    with pytest.raises(MissingRecordError):
        read_json(MemoryStore(), "stats")


def test_read_json_corrupt_raises():
    store = MemoryStore({"stats": b"{not json"})
    with pytest.raises(StoreReadError) as excinfo:
        read_json(store, "stats")
    assert not isinstance(excinfo.value, MissingRecordError)


def test_write_json_encodes_utf8():
    store = MemoryStore()
    write_json(store, "stats", {"Math": {"correct": 1, "incorrect": 0}})
    assert store.get("stats") == b'{"Math": {"correct": 1, "incorrect": 0}}'
