# tests/test_progress.py
import json
from datetime import date

import pytest

from sat_ascent.progress import DailyProgressTracker
from sat_ascent.store import MemoryStore


def _stored(count, goal, day):
    return MemoryStore({"dailyProgress": json.dumps({"count": count, "goal": goal, "day": day}).encode()})


def test_initialize_fresh(store, clock):
    progress = DailyProgressTracker(store, clock).initialize()
    assert progress.count == 0
    assert progress.goal == 10
    assert progress.day == date(2026, 3, 10)


def test_initialize_keeps_todays_count(clock):
    tracker = DailyProgressTracker(_stored(4, 10, "2026-03-10"), clock)
    assert tracker.initialize().count == 4


def test_initialize_resets_stale_day(clock):
    tracker = DailyProgressTracker(_stored(25, 10, "2026-03-09"), clock)
    progress = tracker.initialize()
    assert (progress.count, progress.goal, progress.day) == (0, 10, date(2026, 3, 10))


def test_initialize_accepts_locale_date(clock):
    store = MemoryStore({"dailyProgress": b'{"count": 2, "goal": 10, "date": "3/10/2026"}'})
    assert DailyProgressTracker(store, clock).initialize().count == 2


def test_initialize_corrupt_record(clock):
    store = MemoryStore({"dailyProgress": b'{"count": "lots", "goal": 10, "day": "2026-03-10"}'})
    assert DailyProgressTracker(store, clock).initialize().count == 0


def test_goal_fires_once(clock):
    tracker = DailyProgressTracker(_stored(9, 10, "2026-03-10"), clock)
    tracker.initialize()
    assert tracker.increment() is True
    assert tracker.increment() is False
    assert tracker.current().count == 11


def test_increment_persists(store, clock):
    tracker = DailyProgressTracker(store, clock)
    tracker.initialize()
    tracker.increment()
    tracker.increment()
    assert json.loads(store.get("dailyProgress")) == {"count": 2, "goal": 10, "day": "2026-03-10"}


def test_increment_below_goal(store, clock):
    tracker = DailyProgressTracker(store, clock)
    tracker.initialize()
    assert not any(tracker.increment() for _ in range(9))
    assert tracker.increment() is True


def test_increment_rolls_over_midnight(store, clock):
    tracker = DailyProgressTracker(store, clock)
    tracker.initialize()
    for _ in range(10):
        tracker.increment()
    clock.advance()
    assert tracker.increment() is False
    progress = tracker.current()
    assert progress.count == 1
    assert progress.day == date(2026, 3, 11)


def test_reset_keeps_goal(clock):
    store = _stored(7, 5, "2026-03-10")
    tracker = DailyProgressTracker(store, clock)
    tracker.initialize()
    progress = tracker.reset()
    assert (progress.count, progress.goal) == (0, 5)
    assert json.loads(store.get("dailyProgress"))["count"] == 0


def test_goal_fires_again_after_reset(store, clock):
    tracker = DailyProgressTracker(store, clock, goal=2)
    tracker.initialize()
    tracker.increment()
    assert tracker.increment() is True
    tracker.reset()
    tracker.increment()
    assert tracker.increment() is True


def test_percent_complete_capped(store, clock):
    tracker = DailyProgressTracker(store, clock, goal=4)
    tracker.initialize()
    tracker.increment()
    assert tracker.percent_complete() == 25.0
    for _ in range(6):
        tracker.increment()
    assert tracker.percent_complete() == 100.0


def test_current_rolls_over_after_midnight(store, clock):
    tracker = DailyProgressTracker(store, clock)
    tracker.initialize()
    for _ in range(10):
        tracker.increment()
    clock.advance()
    progress = tracker.current()
    assert (progress.count, progress.goal, progress.day) == (0, 10, date(2026, 3, 11))
    assert tracker.percent_complete() == 0.0


class BrokenStore(MemoryStore):
    def set(self, key, value):
        raise OSError("disk full")


def test_failed_write_leaves_count_unchanged(clock):
    tracker = DailyProgressTracker(BrokenStore(), clock)
    tracker.initialize()
    with pytest.raises(OSError):
        tracker.increment()
    assert tracker.current().count == 0
