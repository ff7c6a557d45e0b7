# backend/tutordesk/services/conflict_checker.py
"""
Conflict Checker

Single place that decides whether an interval is free on the tutor's
calendar. Used by the booking allocator and by lesson edits, always inside
``calendar_write_lock`` so the check and the write are atomic.
"""

from datetime import datetime
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import BookingConflictException
from ..models.lesson import Lesson
from ..repositories.factory import RepositoryFactory
from ..repositories.lesson_repository import LessonRepository
from .base import BaseService

logger = logging.getLogger(__name__)

SLOT_TAKEN_MESSAGE = "This time slot is already taken"


class ConflictChecker(BaseService):
    def __init__(self, db: Session, repository: Optional[LessonRepository] = None):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_lesson_repository(db)

    @BaseService.measure_operation("find_conflicts")
    def find_conflicts(
        self,
        starts_at: datetime,
        ends_at: datetime,
        exclude_lesson_id: Optional[str] = None,
    ) -> List[Lesson]:
        """
        Non-cancelled lessons overlapping ``[starts_at, ends_at)``.

        Touching intervals (10:00-11:00 and 11:00-12:00) do not conflict.
        """
        conflicts = self.repository.get_overlapping_lessons(starts_at, ends_at, exclude_lesson_id)
        if conflicts:
            self.logger.warning(
                f"Found {len(conflicts)} conflicting lessons between {starts_at} and {ends_at}: "
                f"{[lesson.id for lesson in conflicts]}"
            )
        return conflicts

    def ensure_slot_free(
        self,
        starts_at: datetime,
        ends_at: datetime,
        exclude_lesson_id: Optional[str] = None,
    ) -> None:
        """Raise BookingConflictException when the interval is taken."""
        conflicts = self.find_conflicts(starts_at, ends_at, exclude_lesson_id)
        if conflicts:
            raise BookingConflictException(
                SLOT_TAKEN_MESSAGE,
                details={
                    "starts_at": starts_at.isoformat(),
                    "ends_at": ends_at.isoformat(),
                    "conflicting_lesson_ids": [lesson.id for lesson in conflicts],
                },
            )


OVERLAP_CONSTRAINT_NAME = "lessons_no_overlap"


def is_overlap_violation(exc: BaseException) -> bool:
    """
    True when ``exc`` (or its cause) is the database rejecting an overlapping lesson.

    On PostgreSQL the ``lessons_no_overlap`` exclusion constraint fires when two
    writers slipped past the application check; deadlocks between writers are
    reported the same way so callers get a deterministic conflict.
    """
    cause = exc.__cause__ or exc
    orig = getattr(cause, "orig", None)
    diag = getattr(orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", "") or ""
    if constraint_name == OVERLAP_CONSTRAINT_NAME:
        return True
    text = str(orig if orig is not None else cause).lower()
    return OVERLAP_CONSTRAINT_NAME in text or "deadlock detected" in text
