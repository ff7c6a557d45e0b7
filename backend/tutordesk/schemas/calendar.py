"""Calendar view schemas."""

from datetime import date
from typing import Dict, List

from ..domain.periods import Granularity
from ..models.lesson import Lesson
from .base import StandardizedModel
from .lesson import LessonResponse


class CalendarDay(StandardizedModel):
    day: date
    lessons: List[LessonResponse]


class CalendarViewResponse(StandardizedModel):
    granularity: Granularity
    range_start: date
    range_end: date
    days: List[CalendarDay]

    @classmethod
    def from_buckets(
        cls,
        granularity: Granularity,
        range_start: date,
        range_end: date,
        buckets: Dict[date, List[Lesson]],
    ) -> "CalendarViewResponse":
        return cls(
            granularity=granularity,
            range_start=range_start,
            range_end=range_end,
            days=[
                CalendarDay(day=day, lessons=[LessonResponse.from_lesson(l) for l in lessons])
                for day, lessons in buckets.items()
            ],
        )
