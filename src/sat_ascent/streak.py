"""Consecutive-day streak credited on daily goal completion."""
import logging

from sat_ascent.clock import Clock, day_to_str, days_between, parse_day
from sat_ascent.models import StreakRecord
from sat_ascent.store import (
    KeyValueStore, MissingRecordError, StoreReadError, STREAK_KEY, read_json, write_json,
)

logger = logging.getLogger(__name__)


def decode_streak(data) -> StreakRecord:
    if not isinstance(data, dict):
        raise StoreReadError("Streak record is not an object")
    # The browser version stored {"streak", "date"}.
    length = data.get("streakLength", data.get("streak"))
    raw_day = data.get("day", data.get("date"))
    if isinstance(length, bool) or not isinstance(length, int) or length < 0:
        raise StoreReadError(f"Invalid streak length: {length!r}")
    try:
        day = parse_day(raw_day)
    except ValueError as e:
        raise StoreReadError(f"Invalid streak day: {raw_day!r}") from e
    return StreakRecord(streak_length=length, last_credited_day=day)


def encode_streak(record: StreakRecord) -> dict:
    return {
        "streakLength": record.streak_length,
        "day": day_to_str(record.last_credited_day),
    }


class StreakTracker:
    def __init__(self, store: KeyValueStore, clock: Clock):
        self.store = store
        self.clock = clock
        self.record = StreakRecord()

    def initialize(self) -> int:
        """Load the stored streak and report it, or 0 if it has lapsed.

        A lapsed streak is only reported as 0 here; the stored record is
        rewritten the next time the goal is reached.
        """
        try:
            self.record = decode_streak(read_json(self.store, STREAK_KEY))
        except MissingRecordError:
            logger.info("No streak stored yet")
            self.record = StreakRecord()
        except StoreReadError as e:
            logger.warning("Using empty streak: %s", e)
            self.record = StreakRecord()
        return self.current()

    def current(self) -> int:
        last = self.record.last_credited_day
        if last is None:
            return 0
        if days_between(last, self.clock.today()) > 1:
            return 0
        return self.record.streak_length

    def on_goal_reached(self) -> int:
        today = self.clock.today()
        last = self.record.last_credited_day
        if last == today:
            return self.record.streak_length
        if last is not None and days_between(last, today) == 1:
            self.record = StreakRecord(self.record.streak_length + 1, today)
        else:
            self.record = StreakRecord(1, today)
        write_json(self.store, STREAK_KEY, encode_streak(self.record))
        logger.info("Streak is now %d day(s)", self.record.streak_length)
        return self.record.streak_length
