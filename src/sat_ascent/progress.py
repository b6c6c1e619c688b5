"""Daily question counter with goal-completion detection."""
import logging

from sat_ascent.clock import Clock, day_to_str, parse_day
from sat_ascent.config import DAILY_GOAL
from sat_ascent.models import DailyProgress
from sat_ascent.store import (
    KeyValueStore, MissingRecordError, StoreReadError, DAILY_PROGRESS_KEY,
    read_json, write_json,
)

logger = logging.getLogger(__name__)


def decode_progress(data) -> DailyProgress:
    if not isinstance(data, dict):
        raise StoreReadError("Daily progress record is not an object")
    count = data.get("count")
    goal = data.get("goal")
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise StoreReadError(f"Invalid daily count: {count!r}")
    if isinstance(goal, bool) or not isinstance(goal, int) or goal < 1:
        raise StoreReadError(f"Invalid daily goal: {goal!r}")
    # Older records used "date" for the day field.
    raw_day = data.get("day", data.get("date"))
    try:
        day = parse_day(raw_day)
    except ValueError as e:
        raise StoreReadError(f"Invalid daily progress day: {raw_day!r}") from e
    return DailyProgress(count=count, goal=goal, day=day)


def encode_progress(progress: DailyProgress) -> dict:
    return {"count": progress.count, "goal": progress.goal, "day": day_to_str(progress.day)}


class DailyProgressTracker:
    def __init__(self, store: KeyValueStore, clock: Clock, goal: int = DAILY_GOAL):
        self.store = store
        self.clock = clock
        self.default_goal = goal
        self.progress = DailyProgress(count=0, goal=goal, day=clock.today())

    def _fresh(self) -> DailyProgress:
        return DailyProgress(count=0, goal=self.default_goal, day=self.clock.today())

    def _roll_over(self) -> DailyProgress:
        """Swap in a fresh record if the calendar day has changed."""
        if self.progress.day != self.clock.today():
            logger.info("New day, daily count reset (was %d on %s)",
                        self.progress.count, self.progress.day)
            self.progress = self._fresh()
        return self.progress

    def initialize(self) -> DailyProgress:
        try:
            self.progress = decode_progress(read_json(self.store, DAILY_PROGRESS_KEY))
        except MissingRecordError:
            logger.info("No daily progress stored yet, starting fresh")
            self.progress = self._fresh()
        except StoreReadError as e:
            logger.warning("Using fresh daily progress: %s", e)
            self.progress = self._fresh()
        return self.current()

    def increment(self) -> bool:
        """Count one answer. True only on the call that reaches the goal."""
        current = self._roll_over()
        updated = DailyProgress(count=current.count + 1, goal=current.goal, day=current.day)
        write_json(self.store, DAILY_PROGRESS_KEY, encode_progress(updated))
        self.progress = updated
        reached = current.count < updated.goal <= updated.count
        if reached:
            logger.info("Daily goal of %d reached", updated.goal)
        return reached

    def reset(self) -> DailyProgress:
        updated = DailyProgress(count=0, goal=self.progress.goal, day=self.clock.today())
        write_json(self.store, DAILY_PROGRESS_KEY, encode_progress(updated))
        self.progress = updated
        return self.current()

    def current(self) -> DailyProgress:
        p = self._roll_over()
        return DailyProgress(count=p.count, goal=p.goal, day=p.day)

    def percent_complete(self) -> float:
        p = self._roll_over()
        return min(p.count / p.goal * 100, 100.0)
