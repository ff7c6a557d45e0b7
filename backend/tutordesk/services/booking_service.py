# backend/tutordesk/services/booking_service.py
"""
Booking Service

Turns one occurrence of a weekly availability window into a concrete lesson:

    window (weekday + times) + target date + subject + student  ->  Lesson

The window is not consumed: the same weekly slot stays bookable on other
dates. Overlap protection lives in LessonService.create_lesson, which runs the
conflict check and the insert under the calendar write lock.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..auth import CurrentUser
from ..core.clock import Clock, SystemClock
from ..core.config import settings
from ..core.exceptions import ValidationException
from ..domain.periods import sunday_weekday
from ..models.availability import WEEKDAY_NAMES, AvailabilityWindow
from ..models.lesson import Lesson, LessonStatus
from .availability_service import AvailabilityService
from .base import BaseService
from .lesson_service import LessonService

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def price_for_duration(duration_minutes: int, hourly_rate: Decimal) -> Decimal:
    """Hourly rate prorated to the lesson length, rounded to cents."""
    return (Decimal(hourly_rate) * Decimal(duration_minutes) / Decimal(60)).quantize(
        CENTS, rounding=ROUND_HALF_UP
    )


class BookingService(BaseService):
    def __init__(
        self,
        db: Session,
        clock: Optional[Clock] = None,
        lesson_service: Optional[LessonService] = None,
        availability_service: Optional[AvailabilityService] = None,
        hourly_rate: Optional[Decimal] = None,
    ):
        super().__init__(db)
        self.clock = clock or SystemClock()
        self.lesson_service = lesson_service or LessonService(db)
        self.availability_service = availability_service or AvailabilityService(db)
        self.hourly_rate = hourly_rate if hourly_rate is not None else settings.default_hourly_rate

    @BaseService.measure_operation("book_slot")
    def book_slot(
        self,
        window_id: str,
        target_date: date,
        subject_id: str,
        student_id: str,
        actor: Optional[CurrentUser] = None,
    ) -> Lesson:
        """
        Book ``window_id`` on ``target_date`` for a student.

        Args:
            window_id: Availability window being booked
            target_date: Calendar date of the lesson; must be after today and
                fall on the window's weekday
            subject_id: Subject of the lesson
            student_id: Student the lesson is for
            actor: Caller; students may only book for themselves

        Returns:
            The new lesson, status ``scheduled``, pending tutor confirmation

        Raises:
            ValidationException: Date is today or earlier, or on the wrong weekday
            NotFoundException: Window, subject or student does not exist
            ForbiddenException: A student booking for someone else
            BookingConflictException: The interval overlaps another lesson
        """
        self.log_operation(
            "book_slot",
            window_id=window_id,
            target_date=str(target_date),
            subject_id=subject_id,
            student_id=student_id,
        )

        if actor is not None:
            actor.ensure_can_act_for_student(student_id)

        window = self.availability_service.get_window(window_id)
        self._validate_target_date(window, target_date)

        duration_minutes = window.duration_minutes
        lesson = self.lesson_service.create_lesson(
            starts_at=datetime.combine(target_date, window.start_time),
            duration_minutes=duration_minutes,
            student_id=student_id,
            subject_id=subject_id,
            value=price_for_duration(duration_minutes, self.hourly_rate),
            status=LessonStatus.SCHEDULED,
        )

        self.logger.info(
            f"Booked lesson {lesson.id} for student {student_id} at {lesson.starts_at:%Y-%m-%d %H:%M}"
        )
        return lesson

    def _validate_target_date(self, window: AvailabilityWindow, target_date: date) -> None:
        today = self.clock.today()
        if target_date <= today:
            raise ValidationException(
                "Lessons can only be booked from tomorrow onwards",
                field="target_date",
                details={"target_date": target_date.isoformat(), "today": today.isoformat()},
            )
        actual = sunday_weekday(target_date)
        if actual != window.day_of_week:
            raise ValidationException(
                f"{target_date.isoformat()} is not a {window.weekday_name}",
                field="target_date",
                details={
                    "target_date": target_date.isoformat(),
                    "expected_weekday": window.day_of_week,
                    "actual_weekday": actual,
                    "actual_weekday_name": WEEKDAY_NAMES[actual],
                },
            )
