# backend/tutordesk/services/lesson_service.py
"""
Lesson Service - the lesson ledger.

Owns every write to ``lessons``:
- create (tutor scheduling directly, or the booking allocator)
- field edits, re-checking overlap when the interval moves
- status transitions through the lesson state machine
- delete

Writes that occupy calendar time run under ``calendar_write_lock`` with the
overlap check and the insert/update in one transaction.
"""

from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
import logging
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy.orm import Session

from ..auth import CurrentUser
from ..core.calendar_lock import calendar_write_lock
from ..core.clock import to_tutor_local
from ..core.config import settings
from ..core.exceptions import (
    BookingConflictException,
    ForbiddenException,
    NotFoundException,
    RepositoryException,
    ServiceException,
    ValidationException,
)
from ..domain.lesson_state import ensure_transition, is_terminal
from ..models.lesson import Lesson, LessonStatus, compute_ends_at
from ..repositories.factory import RepositoryFactory
from ..repositories.lesson_repository import LessonRepository
from .base import BaseService
from .conflict_checker import SLOT_TAKEN_MESSAGE, ConflictChecker, is_overlap_violation

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("starts_at", "duration_minutes", "subject_id", "value", "notes", "content_covered")


class LessonService(BaseService):
    def __init__(
        self,
        db: Session,
        repository: Optional[LessonRepository] = None,
        conflict_checker: Optional[ConflictChecker] = None,
    ):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_lesson_repository(db)
        self.conflict_checker = conflict_checker or ConflictChecker(db, self.repository)
        self.student_repository = RepositoryFactory.create_student_repository(db)
        self.subject_repository = RepositoryFactory.create_subject_repository(db)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_lesson(self, lesson_id: str, actor: Optional[CurrentUser] = None) -> Lesson:
        lesson = self.repository.get_by_id(lesson_id)
        if not lesson:
            raise NotFoundException(
                "Lesson not found", code="LESSON_NOT_FOUND", details={"lesson_id": lesson_id}
            )
        if actor is not None:
            actor.ensure_can_act_for_student(lesson.student_id)
        return lesson

    @BaseService.measure_operation("list_lessons")
    def list_lessons(
        self,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        student_id: Optional[str] = None,
        status: Optional[LessonStatus] = None,
        actor: Optional[CurrentUser] = None,
    ) -> List[Lesson]:
        """
        Lessons matching the filters, ordered by start time.

        Students always get their own lessons only, whatever ``student_id`` says.
        """
        start = to_tutor_local(start) if start is not None else None
        end = to_tutor_local(end) if end is not None else None
        if start is not None and end is not None and end < start:
            raise ValidationException("end must not be before start", field="end")
        if actor is not None and actor.is_student:
            if student_id is not None and student_id != actor.student_id:
                raise ForbiddenException(
                    "Students can only list their own lessons", code="OUTSIDE_OWN_SCOPE"
                )
            student_id = actor.student_id
        return self.repository.list_lessons(
            start=start, end=end, student_id=student_id, status=status
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @BaseService.measure_operation("create_lesson")
    def create_lesson(
        self,
        *,
        starts_at: datetime,
        duration_minutes: int,
        student_id: str,
        subject_id: str,
        value: Decimal,
        status: LessonStatus = LessonStatus.SCHEDULED,
        notes: Optional[str] = None,
        content_covered: Optional[str] = None,
    ) -> Lesson:
        """
        Insert a lesson into the ledger.

        Raises:
            ValidationException: Duration below the minimum or negative value
            NotFoundException: Unknown student or subject
            BookingConflictException: Interval overlaps a non-cancelled lesson
        """
        status = LessonStatus(status)
        self._validate_duration(duration_minutes)
        self._validate_value(value)
        self._ensure_student(student_id)
        self._ensure_subject(subject_id)

        starts_at = to_tutor_local(starts_at).replace(second=0, microsecond=0)
        ends_at = compute_ends_at(starts_at, duration_minutes)

        self.log_operation(
            "create_lesson",
            student_id=student_id,
            starts_at=starts_at.isoformat(),
            duration_minutes=duration_minutes,
        )
        with self._guarded_write(starts_at, ends_at):
            if status != LessonStatus.CANCELLED:
                self.conflict_checker.ensure_slot_free(starts_at, ends_at)
            lesson = self.repository.create(
                starts_at=starts_at,
                ends_at=ends_at,
                duration_minutes=duration_minutes,
                student_id=student_id,
                subject_id=subject_id,
                status=status.value,
                value=Decimal(value),
                notes=notes,
                content_covered=content_covered,
            )
        return lesson

    @BaseService.measure_operation("update_lesson")
    def update_lesson(self, lesson_id: str, changes: Dict[str, Any]) -> Lesson:
        """
        Edit lesson fields. Status changes go through ``update_lesson_status``.

        Moving ``starts_at`` or changing ``duration_minutes`` re-runs the overlap
        check against every other non-cancelled lesson. Completed and cancelled
        lessons keep their time; notes, content and value stay editable.
        """
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationException(
                f"Fields cannot be edited: {', '.join(sorted(unknown))}",
                field=sorted(unknown)[0],
            )

        lesson = self.get_lesson(lesson_id)
        new_starts_at = changes.get("starts_at", lesson.starts_at)
        if new_starts_at is not None:
            new_starts_at = to_tutor_local(new_starts_at).replace(second=0, microsecond=0)
        new_duration = changes.get("duration_minutes", lesson.duration_minutes)
        moves = new_starts_at != lesson.starts_at or new_duration != lesson.duration_minutes

        if moves:
            if is_terminal(lesson.status):
                raise ValidationException(
                    f"A {lesson.status} lesson cannot be rescheduled", field="starts_at"
                )
            self._validate_duration(new_duration)
        if "value" in changes:
            self._validate_value(changes["value"])
        if "subject_id" in changes:
            self._ensure_subject(changes["subject_id"])

        new_ends_at = compute_ends_at(new_starts_at, new_duration)
        self.log_operation("update_lesson", lesson_id=lesson_id, fields=sorted(changes))
        with self._guarded_write(new_starts_at, new_ends_at):
            if moves:
                if lesson.is_blocking:
                    self.conflict_checker.ensure_slot_free(
                        new_starts_at, new_ends_at, exclude_lesson_id=lesson.id
                    )
                lesson.reschedule(new_starts_at, new_duration)
            for field in ("subject_id", "notes", "content_covered"):
                if field in changes:
                    setattr(lesson, field, changes[field])
            if "value" in changes:
                lesson.value = Decimal(changes["value"])
            self.repository.flush()
        return lesson

    @BaseService.measure_operation("update_lesson_status")
    def update_lesson_status(
        self,
        lesson_id: str,
        new_status: LessonStatus,
        actor: Optional[CurrentUser] = None,
    ) -> Lesson:
        """
        Move a lesson through the state machine.

        Raises:
            NotFoundException: Lesson does not exist
            ForbiddenException: Caller is not the tutor
            InvalidTransitionException: Transition not allowed
        """
        if actor is not None and not actor.is_admin:
            raise ForbiddenException("Only the tutor can change lesson status")

        lesson = self.get_lesson(lesson_id)
        previous = lesson.status
        target = ensure_transition(previous, new_status)
        with self.transaction():
            lesson.status = target.value
            self.repository.flush()
        self.log_operation(
            "update_lesson_status", lesson_id=lesson_id, previous=previous, status=target.value
        )
        return lesson

    @BaseService.measure_operation("delete_lesson")
    def delete_lesson(self, lesson_id: str) -> None:
        with self.transaction():
            deleted = self.repository.delete(lesson_id)
        if not deleted:
            raise NotFoundException(
                "Lesson not found", code="LESSON_NOT_FOUND", details={"lesson_id": lesson_id}
            )
        self.log_operation("delete_lesson", lesson_id=lesson_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @contextmanager
    def _guarded_write(self, starts_at: datetime, ends_at: datetime) -> Iterator[None]:
        """Calendar lock plus transaction; storage-level overlap rejections become conflicts."""
        try:
            with calendar_write_lock(self.db):
                with self.transaction():
                    yield
        except (RepositoryException, ServiceException) as error:
            if is_overlap_violation(error):
                raise BookingConflictException(
                    SLOT_TAKEN_MESSAGE,
                    details={"starts_at": starts_at.isoformat(), "ends_at": ends_at.isoformat()},
                ) from error
            raise

    def _validate_duration(self, duration_minutes: int) -> None:
        if duration_minutes is None or duration_minutes < settings.min_lesson_minutes:
            raise ValidationException(
                f"Lessons must last at least {settings.min_lesson_minutes} minutes",
                field="duration_minutes",
            )

    def _validate_value(self, value: Decimal) -> None:
        if value is None or Decimal(value) < 0:
            raise ValidationException("Lesson value cannot be negative", field="value")

    def _ensure_student(self, student_id: str) -> None:
        if not self.student_repository.exists(id=student_id):
            raise NotFoundException(
                "Student not found", code="STUDENT_NOT_FOUND", details={"student_id": student_id}
            )

    def _ensure_subject(self, subject_id: str) -> None:
        if not self.subject_repository.exists(id=subject_id):
            raise NotFoundException(
                "Subject not found", code="SUBJECT_NOT_FOUND", details={"subject_id": subject_id}
            )

