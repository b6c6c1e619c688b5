from datetime import date

import pytest

from sat_ascent.clock import FixedClock
from sat_ascent.store import MemoryStore


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_ascent.db")
    return db_path


@pytest.fixture
def clock():
    return FixedClock(date(2026, 3, 10))


@pytest.fixture
def store():
    return MemoryStore()
