"""Device-local key-value storage for the progress records."""
import json
import sqlite3
from pathlib import Path
from typing import Optional, Protocol

from sat_ascent.config import DEFAULT_DB_PATH

STATS_KEY = "stats"
DAILY_PROGRESS_KEY = "dailyProgress"
STREAK_KEY = "streak"

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value BLOB
);
"""


class StoreReadError(ValueError):
    """A persisted record is missing or cannot be decoded."""


class MissingRecordError(StoreReadError):
    """Nothing has been stored under the key yet."""


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[bytes]: ...

    def set(self, key: str, value: bytes) -> None: ...


class MemoryStore:
    """In-process store; contents are lost when the object goes away."""

    def __init__(self, initial: Optional[dict] = None):
        self.data: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> Optional[bytes]:
        return self.data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self.data[key] = value


def get_connection(db_path: str = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Return a SQLite connection with row factory enabled."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: str = DEFAULT_DB_PATH) -> None:
    """Initialize the database, creating the store table if it doesn't exist."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = get_connection(db_path)
    conn.executescript(SCHEMA)
    conn.commit()
    conn.close()


class SqliteStore:
    """Durable store backed by a single SQLite table."""

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        self.db_path = db_path
        init_db(db_path)

    def get(self, key: str) -> Optional[bytes]:
        conn = get_connection(self.db_path)
        row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        conn.close()
        if row is None:
            return None
        value = row["value"]
        return value.encode("utf-8") if isinstance(value, str) else bytes(value)

    def set(self, key: str, value: bytes) -> None:
        conn = get_connection(self.db_path)
        conn.execute(
            "INSERT INTO kv_store (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=?",
            (key, value, value),
        )
        conn.commit()
        conn.close()


def read_json(store: KeyValueStore, key: str):
    """Load and decode a JSON record, raising StoreReadError if unusable."""
    raw = store.get(key)
    if raw is None:
        raise MissingRecordError(f"No record stored under {key!r}")
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise StoreReadError(f"Record {key!r} is not valid JSON: {e}") from e


def write_json(store: KeyValueStore, key: str, obj) -> None:
    store.set(key, json.dumps(obj).encode("utf-8"))
