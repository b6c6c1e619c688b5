"""Single entry point for answer recording and progress reads."""
from typing import Optional

from sat_ascent.clock import Clock, SystemClock
from sat_ascent.config import DAILY_GOAL
from sat_ascent.models import AnswerResult, DailyProgress, SubjectStats
from sat_ascent.progress import DailyProgressTracker
from sat_ascent.stats import StatsEngine
from sat_ascent.store import KeyValueStore
from sat_ascent.streak import StreakTracker


class ProgressEngine:
    """Owns stats, daily progress and streak; loads all three on creation."""

    def __init__(self, store: KeyValueStore, clock: Optional[Clock] = None,
                 goal: int = DAILY_GOAL):
        self.clock = clock or SystemClock()
        self.stats = StatsEngine(store)
        self.daily = DailyProgressTracker(store, self.clock, goal=goal)
        self.streak = StreakTracker(store, self.clock)
        self.stats.initialize()
        self.daily.initialize()
        self.streak.initialize()

    def get_stats(self) -> dict[str, SubjectStats]:
        return self.stats.snapshot()

    def get_daily_progress(self) -> DailyProgress:
        return self.daily.current()

    def get_streak(self) -> int:
        return self.streak.current()

    def difficulty_for(self, subject: str) -> str:
        return self.stats.adaptive_difficulty(subject)

    def record_answer(self, subject: str, is_correct: bool) -> AnswerResult:
        self.stats.record_answer(subject, is_correct)
        goal_just_reached = self.daily.increment()
        if goal_just_reached:
            self.streak.on_goal_reached()
        return AnswerResult(goal_just_reached=goal_just_reached, streak=self.get_streak())

    def reset_daily_progress(self) -> DailyProgress:
        return self.daily.reset()
