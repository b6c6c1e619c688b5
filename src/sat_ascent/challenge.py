"""Timed challenge mode: a fixed set of questions under one time budget."""
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional

from sat_ascent.config import (
    CHALLENGE_SUBJECTS, CHALLENGE_DIFFICULTY, OPTION_KEYS, SECONDS_PER_QUESTION,
)
from sat_ascent.engine import ProgressEngine
from sat_ascent.models import ChallengeResult, Question

logger = logging.getLogger(__name__)


def build_challenge(generator) -> list[Question]:
    """Generate every challenge question up front.

    Requests run in parallel. Any GenerationError propagates; a partial
    set is never returned.
    """
    with ThreadPoolExecutor(max_workers=len(CHALLENGE_SUBJECTS)) as executor:
        return list(executor.map(
            lambda subject: generator.generate_question(subject, CHALLENGE_DIFFICULTY),
            CHALLENGE_SUBJECTS,
        ))


class Challenge:
    def __init__(self, questions: list[Question], time_limit: Optional[float] = None,
                 timer: Callable[[], float] = time.monotonic):
        self.questions = questions
        self.time_limit = time_limit if time_limit is not None else len(questions) * SECONDS_PER_QUESTION
        self.timer = timer
        self.started_at = timer()
        self.answers: list[Optional[str]] = [None] * len(questions)
        self.result: Optional[ChallengeResult] = None

    def remaining(self) -> float:
        return max(0.0, self.time_limit - (self.timer() - self.started_at))

    def expired(self) -> bool:
        return self.remaining() <= 0

    def answer(self, index: int, option_key: str) -> bool:
        """Select an answer. Returns False if time is up and it was not taken."""
        if self.result is not None or self.expired():
            return False
        key = option_key.strip().upper()
        if key not in OPTION_KEYS:
            raise ValueError(f"Unknown option: {option_key!r}")
        self.answers[index] = key
        return True

    def finish(self, engine: ProgressEngine) -> ChallengeResult:
        """Record answered questions into the engine once and score the run."""
        if self.result is not None:
            return self.result
        correct = 0
        answered = 0
        for question, answer in zip(self.questions, self.answers):
            if answer is None:
                continue
            answered += 1
            is_correct = answer == question.correct_option_key
            correct += int(is_correct)
            engine.record_answer(question.subject, is_correct)
        self.result = ChallengeResult(
            correct=correct,
            answered=answered,
            total=len(self.questions),
            timed_out=self.expired(),
            answers=list(self.answers),
        )
        logger.info("Challenge finished: %d/%d correct", correct, len(self.questions))
        return self.result
