# backend/tutordesk/core/clock.py
"""
Clock abstraction for "now" and "today".

Booking cut-offs and dashboard periods depend on the current date. Services
take a ``Clock`` so tests can pin time instead of reading the wall clock.
Lesson times are stored as naive local datetimes in the tutor's timezone.
"""

from datetime import date, datetime
from typing import Optional, Protocol

import pytz

from .config import settings


class Clock(Protocol):
    def now(self) -> datetime:
        ...

    def today(self) -> date:
        ...


class SystemClock:
    """Wall-clock time in the tutor's timezone."""

    def __init__(self, timezone_name: Optional[str] = None) -> None:
        self._tz = pytz.timezone(timezone_name or settings.tutor_timezone)

    def now(self) -> datetime:
        return datetime.now(self._tz).replace(tzinfo=None)

    def today(self) -> date:
        return self.now().date()


class FixedClock:
    """Clock pinned to a given moment. Used by tests and backfill scripts."""

    def __init__(self, moment: datetime) -> None:
        self._moment = moment.replace(tzinfo=None)

    def now(self) -> datetime:
        return self._moment

    def today(self) -> date:
        return self._moment.date()


def to_tutor_local(value: datetime) -> datetime:
    """Aware datetimes are converted to the tutor's wall-clock time; naive ones pass through."""
    if value.tzinfo is None:
        return value
    local = value.astimezone(pytz.timezone(settings.tutor_timezone))
    return local.replace(tzinfo=None)
