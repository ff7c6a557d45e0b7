"""Dashboard response schemas."""

from datetime import datetime
from typing import Dict, List

from ..domain.indicators import PeriodIndicators
from ..domain.periods import Period
from ._strict_base import StrictModel
from .base import Money, StandardizedModel


class PeriodIndicatorsResponse(StandardizedModel):
    period: Period
    range_start: datetime
    range_end: datetime
    confirmed_lesson_count: int
    scheduled_lesson_count: int
    completed_lesson_count: int
    total_accrued_value: Money
    total_worked_hours: float

    @classmethod
    def build(cls, period: Period, indicators: PeriodIndicators) -> "PeriodIndicatorsResponse":
        return cls(
            period=period,
            range_start=indicators.range_start,
            range_end=indicators.range_end,
            confirmed_lesson_count=indicators.confirmed_lesson_count,
            scheduled_lesson_count=indicators.scheduled_lesson_count,
            completed_lesson_count=indicators.completed_lesson_count,
            total_accrued_value=indicators.total_accrued_value,
            total_worked_hours=indicators.total_worked_hours,
        )


class WorkedHoursResponse(StandardizedModel):
    period: Period
    hours_by_weekday: Dict[int, float]
    total_hours: float


class SubjectShare(StrictModel):
    subject: str
    lesson_count: int


class SubjectDistributionResponse(StrictModel):
    period: Period
    subjects: List[SubjectShare]
    total_lessons: int

    @classmethod
    def from_counts(cls, period: Period, counts: Dict[str, int]) -> "SubjectDistributionResponse":
        return cls(
            period=period,
            subjects=[SubjectShare(subject=name, lesson_count=n) for name, n in counts.items()],
            total_lessons=sum(counts.values()),
        )
