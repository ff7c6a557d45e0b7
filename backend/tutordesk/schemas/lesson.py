# backend/tutordesk/schemas/lesson.py
"""
Lesson schemas.

Lesson times are the tutor's wall-clock time. Clients may send naive
ISO datetimes (taken as tutor-local) or offset-aware ones (converted).
"""

from datetime import date, datetime
from typing import Any, Dict, Optional

from pydantic import Field, field_validator

from ..core.clock import to_tutor_local
from ..core.config import settings
from ..models.lesson import Lesson, LessonStatus
from ._strict_base import StrictRequestModel
from .base import Money, StandardizedModel


class BookSlotRequest(StrictRequestModel):
    """Book one occurrence of a weekly window."""

    window_id: str = Field(..., description="Availability window to book")
    target_date: date = Field(..., description="Lesson date, YYYY-MM-DD")
    subject_id: str = Field(..., description="Subject of the lesson")
    student_id: Optional[str] = Field(
        None, description="Student the lesson is for; defaults to the calling student"
    )


class LessonCreate(StrictRequestModel):
    starts_at: datetime
    duration_minutes: int = Field(..., description="Length in minutes")
    student_id: str
    subject_id: str
    value: Money
    status: LessonStatus = LessonStatus.SCHEDULED
    notes: Optional[str] = None
    content_covered: Optional[str] = None

    @field_validator("starts_at")
    @classmethod
    def _localize(cls, v: datetime) -> datetime:
        return to_tutor_local(v)


class LessonUpdate(StrictRequestModel):
    """Partial edit. Only fields present in the body are changed."""

    starts_at: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    subject_id: Optional[str] = None
    value: Optional[Money] = None
    notes: Optional[str] = None
    content_covered: Optional[str] = None

    @field_validator("starts_at")
    @classmethod
    def _localize(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_tutor_local(v) if v is not None else v

    @field_validator("starts_at", "duration_minutes", "subject_id", "value")
    @classmethod
    def _not_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class LessonStatusUpdate(StrictRequestModel):
    status: LessonStatus


class LessonResponse(StandardizedModel):
    id: str
    starts_at: datetime
    ends_at: datetime
    duration_minutes: int
    student_id: str
    student_name: Optional[str] = None
    subject_id: str
    subject_name: Optional[str] = None
    status: LessonStatus
    value: Money
    notes: Optional[str] = None
    content_covered: Optional[str] = None
    timezone: str = Field(default_factory=lambda: settings.tutor_timezone)

    @classmethod
    def from_lesson(cls, lesson: Lesson) -> "LessonResponse":
        return cls(
            id=lesson.id,
            starts_at=lesson.starts_at,
            ends_at=lesson.ends_at,
            duration_minutes=lesson.duration_minutes,
            student_id=lesson.student_id,
            student_name=lesson.student.full_name if lesson.student else None,
            subject_id=lesson.subject_id,
            subject_name=lesson.subject.name if lesson.subject else None,
            status=LessonStatus(lesson.status),
            value=lesson.value,
            notes=lesson.notes,
            content_covered=lesson.content_covered,
        )
