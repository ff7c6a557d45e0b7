# backend/tutordesk/services/period_indicators_service.py
"""
Period Indicators Service

Dashboard reads: lesson counts, accrued value, worked hours and the subject
mix for the current day, week or month. Read-only and idempotent; the clock
decides which calendar period "today" falls in.
"""

from datetime import datetime
import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from ..core.clock import Clock, SystemClock
from ..domain.indicators import (
    PeriodIndicators,
    compute_period_indicators,
    lessons_by_subject,
    worked_hours_by_weekday,
)
from ..domain.periods import Period, resolve_period
from ..models.lesson import Lesson
from ..repositories.factory import RepositoryFactory
from ..repositories.lesson_repository import LessonRepository
from .base import BaseService

logger = logging.getLogger(__name__)


class PeriodIndicatorsService(BaseService):
    def __init__(
        self,
        db: Session,
        clock: Optional[Clock] = None,
        repository: Optional[LessonRepository] = None,
    ):
        super().__init__(db)
        self.clock = clock or SystemClock()
        self.repository = repository or RepositoryFactory.create_lesson_repository(db)

    @BaseService.measure_operation("get_period_indicators")
    def get_period_indicators(self, period: Period) -> PeriodIndicators:
        """Indicators for ``period``; ``range_start``/``range_end`` carry the range aggregated."""
        start, end, lessons = self._lessons_in(period)
        indicators = compute_period_indicators(lessons, start, end)
        logger.debug(
            "Indicators for %s [%s, %s): %s lessons considered", period, start, end, len(lessons)
        )
        return indicators

    @BaseService.measure_operation("get_worked_hours_by_weekday")
    def get_worked_hours_by_weekday(self, period: Period) -> Dict[int, float]:
        _, _, lessons = self._lessons_in(period)
        return worked_hours_by_weekday(lessons)

    @BaseService.measure_operation("get_subject_distribution")
    def get_subject_distribution(self, period: Period) -> Dict[str, int]:
        _, _, lessons = self._lessons_in(period)
        return lessons_by_subject(lessons)

    def _lessons_in(self, period: Period) -> Tuple[datetime, datetime, List[Lesson]]:
        start, end = resolve_period(Period(period), self.clock.today())
        return start, end, self.repository.list_lessons(start=start, end=end)
