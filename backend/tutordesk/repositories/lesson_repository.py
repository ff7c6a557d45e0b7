# backend/tutordesk/repositories/lesson_repository.py
"""
Lesson Repository

Range queries over the ledger. Membership in a date range is decided by
``starts_at`` alone; overlap queries use the full ``[starts_at, ends_at)``
interval.
"""

from datetime import datetime
import logging
from typing import List, Optional

from sqlalchemy.orm import Query, Session, joinedload

from ..models.lesson import BLOCKING_STATUSES, Lesson, LessonStatus
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class LessonRepository(BaseRepository[Lesson]):
    def __init__(self, db: Session):
        super().__init__(db, Lesson)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(Lesson.student), joinedload(Lesson.subject))

    def list_lessons(
        self,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        student_id: Optional[str] = None,
        status: Optional[LessonStatus] = None,
    ) -> List[Lesson]:
        """
        Lessons ordered by start time.

        Args:
            start: Inclusive lower bound on ``starts_at``
            end: Exclusive upper bound on ``starts_at``
            student_id: Only this student's lessons
            status: Only lessons in this status
        """
        query = self._apply_eager_loading(self._build_query())
        if start is not None:
            query = query.filter(Lesson.starts_at >= start)
        if end is not None:
            query = query.filter(Lesson.starts_at < end)
        if student_id is not None:
            query = query.filter(Lesson.student_id == student_id)
        if status is not None:
            query = query.filter(Lesson.status == LessonStatus(status).value)
        return self._execute_query(query.order_by(Lesson.starts_at, Lesson.id))

    def get_overlapping_lessons(
        self,
        starts_at: datetime,
        ends_at: datetime,
        exclude_lesson_id: Optional[str] = None,
    ) -> List[Lesson]:
        """Non-cancelled lessons whose interval intersects ``[starts_at, ends_at)``."""
        query = self._build_query().filter(
            Lesson.status.in_([status.value for status in BLOCKING_STATUSES]),
            Lesson.starts_at < ends_at,
            Lesson.ends_at > starts_at,
        )
        if exclude_lesson_id:
            query = query.filter(Lesson.id != exclude_lesson_id)
        return self._execute_query(query.order_by(Lesson.starts_at))
