"""Progress dashboard scoring and statistics."""
from sat_ascent.engine import ProgressEngine
from sat_ascent.models import SubjectStats
from sat_ascent.stats import accuracy, adaptive_difficulty


def get_accuracy_label(pct: float) -> str:
    if pct >= 80:
        return "STRONG"
    elif pct >= 65:
        return "SOLID"
    elif pct >= 50:
        return "NEEDS WORK"
    return "WEAK"


def get_accuracy_color(pct: float) -> str:
    if pct >= 80:
        return "green"
    elif pct >= 65:
        return "yellow"
    elif pct >= 50:
        return "dark_orange"
    return "red"


def _raw_accuracy(correct: int, total: int) -> float:
    # Dashboard figures use 0 for "no data", unlike adaptive difficulty.
    if total == 0:
        return 0.0
    return correct / total


def get_overall_accuracy(stats: dict[str, SubjectStats]) -> dict:
    total = sum(s.total for s in stats.values())
    correct = sum(s.correct for s in stats.values())
    return {
        "correct": correct,
        "total": total,
        "accuracy": round(_raw_accuracy(correct, total) * 100, 1),
    }


def _section_score(acc: float) -> int:
    return min(800, 200 + round(acc * 600))


def predict_score(stats: dict[str, SubjectStats]) -> dict:
    """Rough SAT estimate: each section scales 200-800 with accuracy."""
    math = stats["Math"]
    rw_correct = stats["Reading"].correct + stats["Writing"].correct
    rw_total = stats["Reading"].total + stats["Writing"].total
    math_score = _section_score(_raw_accuracy(math.correct, math.total))
    rw_score = _section_score(_raw_accuracy(rw_correct, rw_total))
    return {
        "total": min(1600, math_score + rw_score),
        "math": math_score,
        "reading_writing": rw_score,
    }


def get_subject_scores(stats: dict[str, SubjectStats]) -> list[dict]:
    results = []
    for subject, s in stats.items():
        pct = round(_raw_accuracy(s.correct, s.total) * 100, 1)
        results.append({
            "subject": subject,
            "correct": s.correct,
            "incorrect": s.incorrect,
            "accuracy": pct,
            "label": get_accuracy_label(pct) if s.total else "NO DATA",
            "next_difficulty": adaptive_difficulty(accuracy(s)),
        })
    return results


def get_weakest_subject(stats: dict[str, SubjectStats]) -> str | None:
    attempted = {subject: s for subject, s in stats.items() if s.total}
    if not attempted:
        return None
    return min(attempted, key=lambda subject: accuracy(attempted[subject]))


def get_dashboard(engine: ProgressEngine) -> dict:
    stats = engine.get_stats()
    progress = engine.get_daily_progress()
    return {
        "overall": get_overall_accuracy(stats),
        "predicted": predict_score(stats),
        "subjects": get_subject_scores(stats),
        "daily": {
            "count": progress.count,
            "goal": progress.goal,
            "percent": engine.daily.percent_complete(),
        },
        "streak": engine.get_streak(),
        "weakest": get_weakest_subject(stats),
    }
