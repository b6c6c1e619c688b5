"""Calendar-day helpers and injectable clocks."""
from datetime import date, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    def today(self) -> date: ...


class SystemClock:
    """Local calendar day from the system clock."""

    def today(self) -> date:
        return date.today()


class FixedClock:
    """Clock pinned to a given day; advance it explicitly in tests."""

    def __init__(self, day: date):
        self.day = day

    def today(self) -> date:
        return self.day

    def advance(self, days: int = 1) -> date:
        self.day = self.day + timedelta(days=days)
        return self.day


def days_between(earlier: date, later: date) -> int:
    """Whole calendar days from `earlier` to `later` (negative if reversed)."""
    return (later - earlier).days


def day_to_str(day: date) -> str:
    return day.isoformat()


def parse_day(value: str) -> date:
    """Parse an ISO day, falling back to the browser's M/D/YYYY locale form.

    Raises ValueError when neither format matches.
    """
    if not isinstance(value, str):
        raise ValueError(f"Not a day string: {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    return datetime.strptime(value, "%m/%d/%Y").date()
