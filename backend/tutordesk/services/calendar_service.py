# backend/tutordesk/services/calendar_service.py
"""
Calendar Service - loads lessons for a date range and hands them to the
projector.
"""

from datetime import date, datetime, time, timedelta
import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from ..auth import CurrentUser
from ..domain.calendar_view import project_calendar
from ..domain.periods import Granularity
from ..models.lesson import Lesson
from ..repositories.factory import RepositoryFactory
from ..repositories.lesson_repository import LessonRepository
from .base import BaseService

logger = logging.getLogger(__name__)


class CalendarService(BaseService):
    def __init__(self, db: Session, repository: Optional[LessonRepository] = None):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_lesson_repository(db)

    @BaseService.measure_operation("get_calendar_view")
    def get_calendar_view(
        self,
        range_start: date,
        range_end: date,
        granularity: Granularity,
        student_id: Optional[str] = None,
        actor: Optional[CurrentUser] = None,
    ) -> Dict[date, List[Lesson]]:
        """
        Lessons bucketed by start date over ``[range_start, range_end]``.

        Cancelled lessons are included; callers decide how to render them.
        A student actor only ever sees their own lessons.
        """
        if actor is not None and actor.is_student:
            if student_id is not None:
                actor.ensure_can_act_for_student(student_id)
            student_id = actor.student_id

        # Empty fetch window when the range is inverted; the projector rejects it.
        start = datetime.combine(range_start, time.min)
        end = datetime.combine(max(range_start, range_end) + timedelta(days=1), time.min)
        lessons = self.repository.list_lessons(start=start, end=end, student_id=student_id)
        return project_calendar(lessons, range_start, range_end, granularity)
