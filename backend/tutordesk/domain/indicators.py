# backend/tutordesk/domain/indicators.py
"""
Dashboard aggregates over the lesson ledger.

Pure functions over any iterable of lesson-like objects (``starts_at``,
``status``, ``duration_minutes``, ``value``). Status filters:

* confirmed_lesson_count - status confirmed
* completed_lesson_count - status completed
* scheduled_lesson_count - every booked lesson (scheduled, confirmed, completed)
* total_accrued_value / total_worked_hours - confirmed or completed only

The subject distribution counts every lesson in the period, cancelled ones
included.
"""

from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from ..models.lesson import BLOCKING_STATUSES, LessonStatus
from .periods import sunday_weekday

ACCRUING_STATUSES = frozenset({LessonStatus.CONFIRMED.value, LessonStatus.COMPLETED.value})
BOOKED_STATUSES = frozenset(status.value for status in BLOCKING_STATUSES)

CENTS = Decimal("0.01")
UNKNOWN_SUBJECT = "Unknown"


@dataclass(frozen=True)
class PeriodIndicators:
    confirmed_lesson_count: int
    scheduled_lesson_count: int
    completed_lesson_count: int
    total_accrued_value: Decimal
    total_worked_hours: float
    range_start: Optional[datetime] = None
    range_end: Optional[datetime] = None


def _in_range(lesson, start: Optional[datetime], end: Optional[datetime]) -> bool:
    if start is not None and lesson.starts_at < start:
        return False
    if end is not None and lesson.starts_at >= end:
        return False
    return True


def compute_period_indicators(
    lessons: Iterable,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> PeriodIndicators:
    confirmed = scheduled = completed = 0
    accrued = Decimal("0")
    worked_minutes = 0

    for lesson in lessons:
        if not _in_range(lesson, start, end):
            continue
        status = LessonStatus(lesson.status).value
        if status == LessonStatus.CONFIRMED.value:
            confirmed += 1
        if status == LessonStatus.COMPLETED.value:
            completed += 1
        if status in BOOKED_STATUSES:
            scheduled += 1
        if status in ACCRUING_STATUSES:
            accrued += Decimal(lesson.value)
            worked_minutes += lesson.duration_minutes

    return PeriodIndicators(
        confirmed_lesson_count=confirmed,
        scheduled_lesson_count=scheduled,
        completed_lesson_count=completed,
        total_accrued_value=accrued.quantize(CENTS),
        total_worked_hours=worked_minutes / 60,
        range_start=start,
        range_end=end,
    )


def worked_hours_by_weekday(lessons: Iterable) -> Dict[int, float]:
    """Hours of confirmed/completed lessons per weekday (0 = Sunday)."""
    minutes: List[int] = [0] * 7
    for lesson in lessons:
        if LessonStatus(lesson.status).value in ACCRUING_STATUSES:
            minutes[sunday_weekday(lesson.starts_at.date())] += lesson.duration_minutes
    return {weekday: total / 60 for weekday, total in enumerate(minutes)}


def lessons_by_subject(lessons: Iterable) -> Dict[str, int]:
    """Lesson count per subject name, largest first, ties alphabetical."""
    counts: Counter = Counter()
    for lesson in lessons:
        subject = getattr(lesson, "subject", None)
        counts[getattr(subject, "name", None) or UNKNOWN_SUBJECT] += 1
    return dict(sorted(counts.items(), key=lambda item: (-item[1], item[0])))
