"""Shared dates for the fixed test clock."""

from datetime import date, datetime, time, timedelta

# Wednesday
FIXED_NOW = datetime(2025, 3, 5, 10, 0)
TODAY = FIXED_NOW.date()
NEXT_TUESDAY = date(2025, 3, 11)
WEEK_START = date(2025, 3, 2)


def at(day: date, hour: int, minute: int = 0) -> datetime:
    return datetime.combine(day, time(hour, minute))


def days_from_today(days: int) -> date:
    return TODAY + timedelta(days=days)


class MidnightCrossingClock:
    """Advances one day every time ``today()`` is read."""

    def __init__(self, start: datetime) -> None:
        self._moment = start

    def now(self) -> datetime:
        return self._moment

    def today(self) -> date:
        current = self._moment.date()
        self._moment += timedelta(days=1)
        return current
