# backend/tutordesk/models/lesson.py
"""
Lesson model - the tutor's ledger of dated lessons.

Each lesson occupies ``[starts_at, ends_at)`` on the tutor's single calendar.
``ends_at`` is stored (not only derived) so overlap queries and the
PostgreSQL exclusion constraint can use a plain column range.

Times are naive local datetimes in the tutor's timezone.
"""

from datetime import datetime, timedelta
from enum import Enum
import logging
from typing import Any

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base

logger = logging.getLogger(__name__)


class LessonStatus(str, Enum):
    """Lesson lifecycle statuses."""

    SCHEDULED = "scheduled"  # Booked, waiting for the tutor to confirm
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Statuses that occupy the calendar
BLOCKING_STATUSES = (LessonStatus.SCHEDULED, LessonStatus.CONFIRMED, LessonStatus.COMPLETED)


class Lesson(Base):
    __tablename__ = "lessons"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))

    starts_at = Column(DateTime, nullable=False)
    ends_at = Column(DateTime, nullable=False)
    duration_minutes = Column(Integer, nullable=False)

    student_id = Column(String(26), ForeignKey("students.id"), nullable=False)
    subject_id = Column(String(26), ForeignKey("subjects.id"), nullable=False)

    status = Column(String(20), nullable=False, default=LessonStatus.SCHEDULED.value)
    value = Column(Numeric(10, 2), nullable=False)
    notes = Column(Text, nullable=True)
    content_covered = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    student = relationship("Student", back_populates="lessons")
    subject = relationship("Subject", back_populates="lessons")

    __table_args__ = (
        CheckConstraint(
            "status IN ('scheduled', 'confirmed', 'completed', 'cancelled')",
            name="ck_lessons_status",
        ),
        CheckConstraint("duration_minutes >= 15", name="ck_lessons_min_duration"),
        CheckConstraint("value >= 0", name="ck_lessons_value_non_negative"),
        CheckConstraint("ends_at > starts_at", name="ck_lessons_interval_order"),
        Index("idx_lessons_starts_at", "starts_at"),
        Index("idx_lessons_student_starts_at", "student_id", "starts_at"),
    )

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        if not self.status:
            self.status = LessonStatus.SCHEDULED.value
        if self.ends_at is None and self.starts_at is not None and self.duration_minutes:
            self.ends_at = compute_ends_at(self.starts_at, self.duration_minutes)

    @property
    def is_blocking(self) -> bool:
        return self.status != LessonStatus.CANCELLED.value

    def reschedule(self, starts_at: datetime, duration_minutes: int) -> None:
        self.starts_at = starts_at
        self.duration_minutes = duration_minutes
        self.ends_at = compute_ends_at(starts_at, duration_minutes)

    def __repr__(self) -> str:
        return (
            f"<Lesson {self.id}: student={self.student_id}, "
            f"{self.starts_at}-{self.ends_at}, status={self.status}>"
        )


def compute_ends_at(starts_at: datetime, duration_minutes: int) -> datetime:
    return starts_at + timedelta(minutes=duration_minutes)
