"""Per-subject answer statistics and adaptive difficulty."""
import logging

from sat_ascent.config import (
    SUBJECTS, NEUTRAL_ACCURACY, HARD_THRESHOLD, EASY_THRESHOLD,
)
from sat_ascent.models import SubjectStats
from sat_ascent.store import (
    KeyValueStore, MissingRecordError, StoreReadError, STATS_KEY, read_json, write_json,
)

logger = logging.getLogger(__name__)


def default_stats() -> dict[str, SubjectStats]:
    return {subject: SubjectStats() for subject in SUBJECTS}


def accuracy(stats: SubjectStats) -> float:
    """Share of correct answers; 0.5 when nothing has been answered yet."""
    if stats.total == 0:
        return NEUTRAL_ACCURACY
    return stats.correct / stats.total


def adaptive_difficulty(acc: float) -> str:
    if acc > HARD_THRESHOLD:
        return "Hard"
    elif acc < EASY_THRESHOLD:
        return "Easy"
    return "Medium"


def _counter(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise StoreReadError(f"Invalid counter value: {value!r}")
    return value


def decode_stats(data) -> dict[str, SubjectStats]:
    if not isinstance(data, dict):
        raise StoreReadError("Stats record is not an object")
    stats = default_stats()
    for subject in SUBJECTS:
        entry = data.get(subject)
        if entry is None:
            continue
        if not isinstance(entry, dict):
            raise StoreReadError(f"Stats entry for {subject} is not an object")
        stats[subject] = SubjectStats(
            correct=_counter(entry.get("correct", 0)),
            incorrect=_counter(entry.get("incorrect", 0)),
        )
    return stats


def encode_stats(stats: dict[str, SubjectStats]) -> dict:
    return {
        subject: {"correct": s.correct, "incorrect": s.incorrect}
        for subject, s in stats.items()
    }


class StatsEngine:
    """Owns the subject -> correct/incorrect counters."""

    def __init__(self, store: KeyValueStore):
        self.store = store
        self.stats = default_stats()

    def initialize(self) -> dict[str, SubjectStats]:
        try:
            self.stats = decode_stats(read_json(self.store, STATS_KEY))
        except MissingRecordError:
            logger.info("No stats stored yet, starting from zero")
            self.stats = default_stats()
        except StoreReadError as e:
            logger.warning("Using default stats: %s", e)
            self.stats = default_stats()
        return self.snapshot()

    def _get(self, subject: str) -> SubjectStats:
        if subject not in self.stats:
            raise ValueError(f"Unknown subject: {subject!r}")
        return self.stats[subject]

    def record_answer(self, subject: str, is_correct: bool) -> dict[str, SubjectStats]:
        entry = self._get(subject)
        if is_correct:
            updated = SubjectStats(entry.correct + 1, entry.incorrect)
        else:
            updated = SubjectStats(entry.correct, entry.incorrect + 1)
        write_json(self.store, STATS_KEY, encode_stats({**self.stats, subject: updated}))
        self.stats[subject] = updated
        return self.snapshot()

    def accuracy(self, subject: str) -> float:
        return accuracy(self._get(subject))

    def adaptive_difficulty(self, subject: str) -> str:
        return adaptive_difficulty(self.accuracy(subject))

    def snapshot(self) -> dict[str, SubjectStats]:
        """Copy of the counters, safe to hand to the presentation layer."""
        return {
            subject: SubjectStats(s.correct, s.incorrect)
            for subject, s in self.stats.items()
        }
