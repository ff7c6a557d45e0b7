# backend/tutordesk/domain/calendar_view.py
"""
Calendar projection: bucket lessons by the calendar date they start on.

A lesson starting at 23:30 and running past midnight belongs to its start
date only, the same rule the dashboard uses for period membership.
"""

from collections import OrderedDict
from datetime import date, timedelta
from typing import Dict, Iterable, List, TypeVar

from ..core.exceptions import ValidationException
from .periods import Granularity

L = TypeVar("L")


def project_calendar(
    lessons: Iterable[L],
    range_start: date,
    range_end: date,
    granularity: Granularity,
) -> Dict[date, List[L]]:
    """
    Group ``lessons`` by start date within ``[range_start, range_end]``.

    ``day`` granularity yields a single key (``range_start``) holding the
    flat, time-ordered list. ``week`` and ``month`` yield one key per date in
    the range, empty days included, in calendar order.
    """
    granularity = Granularity(granularity)
    if range_end < range_start:
        raise ValidationException("range_end must not be before range_start", field="range_end")
    if granularity is Granularity.DAY:
        range_end = range_start

    buckets: Dict[date, List[L]] = OrderedDict()
    cursor = range_start
    while cursor <= range_end:
        buckets[cursor] = []
        cursor += timedelta(days=1)

    for lesson in sorted(lessons, key=lambda item: item.starts_at):
        bucket = buckets.get(lesson.starts_at.date())
        if bucket is not None:
            bucket.append(lesson)

    return buckets
