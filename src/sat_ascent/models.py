"""Data classes for the study progress domain model."""
from dataclasses import dataclass, field
from datetime import date
from typing import Optional


@dataclass
class SubjectStats:
    correct: int = 0
    incorrect: int = 0

    @property
    def total(self) -> int:
        return self.correct + self.incorrect


@dataclass
class DailyProgress:
    count: int
    goal: int
    day: date


@dataclass
class StreakRecord:
    streak_length: int = 0
    last_credited_day: Optional[date] = None


@dataclass
class Question:
    prompt: str
    options: dict[str, str]
    correct_option_key: str
    explanation: str
    subject: str
    topic: str
    difficulty: str = "Medium"


@dataclass
class AnswerResult:
    """What one recorded answer changed beyond the stats counters."""
    goal_just_reached: bool
    streak: int


@dataclass
class ChallengeResult:
    correct: int
    answered: int
    total: int
    timed_out: bool = False
    answers: list = field(default_factory=list)
