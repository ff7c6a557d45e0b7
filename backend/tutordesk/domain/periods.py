# backend/tutordesk/domain/periods.py
"""
Calendar arithmetic shared by the dashboard and the calendar view.

Weeks start on Sunday. Period ranges are half-open ``[start, end)`` datetimes;
calendar ranges are inclusive dates.
"""

from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Tuple


class Period(str, Enum):
    TODAY = "today"
    THIS_WEEK = "this_week"
    THIS_MONTH = "this_month"


class Granularity(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


def sunday_weekday(day: date) -> int:
    """Weekday with 0 = Sunday ... 6 = Saturday."""
    return (day.weekday() + 1) % 7


def start_of_week(day: date) -> date:
    return day - timedelta(days=sunday_weekday(day))


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def start_of_next_month(day: date) -> date:
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def resolve_period(period: Period, today: date) -> Tuple[datetime, datetime]:
    """Concrete ``[start, end)`` boundaries of ``period`` as seen on ``today``."""
    period = Period(period)
    if period is Period.TODAY:
        first, last_exclusive = today, today + timedelta(days=1)
    elif period is Period.THIS_WEEK:
        first = start_of_week(today)
        last_exclusive = first + timedelta(days=7)
    else:
        first, last_exclusive = start_of_month(today), start_of_next_month(today)
    return datetime.combine(first, time.min), datetime.combine(last_exclusive, time.min)


def calendar_range(anchor: date, granularity: Granularity) -> Tuple[date, date]:
    """Inclusive date range shown by a calendar page containing ``anchor``."""
    granularity = Granularity(granularity)
    if granularity is Granularity.DAY:
        return anchor, anchor
    if granularity is Granularity.WEEK:
        first = start_of_week(anchor)
        return first, first + timedelta(days=6)
    return start_of_month(anchor), start_of_next_month(anchor) - timedelta(days=1)
