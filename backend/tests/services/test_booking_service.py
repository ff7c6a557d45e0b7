"""BookingService: window + date -> scheduled lesson."""

from datetime import time
from decimal import Decimal

import pytest

from tutordesk.auth import CurrentUser
from tutordesk.core.enums import RoleName
from tutordesk.core.exceptions import (
    BookingConflictException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from tutordesk.models import AvailabilityWindow, Lesson
from tutordesk.models.lesson import LessonStatus
from tutordesk.services.booking_service import BookingService

from tests.helpers import NEXT_TUESDAY, at, days_from_today


@pytest.fixture
def service(db, clock):
    return BookingService(db, clock=clock)


def test_booking_next_tuesday(service, tuesday_window, physics, student):
    lesson = service.book_slot(tuesday_window.id, NEXT_TUESDAY, physics.id, student.id)

    assert lesson.id
    assert lesson.starts_at == at(NEXT_TUESDAY, 14)
    assert lesson.ends_at == at(NEXT_TUESDAY, 16)
    assert lesson.duration_minutes == 120
    assert lesson.status == LessonStatus.SCHEDULED.value
    assert lesson.value == Decimal("120.00")
    assert lesson.student_id == student.id
    assert lesson.subject_id == physics.id


def test_second_booking_of_same_slot_conflicts(
    service, db, tuesday_window, physics, student, other_student
):
    first = service.book_slot(tuesday_window.id, NEXT_TUESDAY, physics.id, student.id)

    with pytest.raises(BookingConflictException) as exc_info:
        service.book_slot(tuesday_window.id, NEXT_TUESDAY, physics.id, other_student.id)

    assert exc_info.value.code == "BOOKING_CONFLICT"
    assert exc_info.value.message == "This time slot is already taken"
    assert exc_info.value.details["conflicting_lesson_ids"] == [first.id]
    assert db.query(Lesson).count() == 1


def test_same_window_on_another_week_is_still_bookable(
    service, tuesday_window, physics, student, other_student
):
    service.book_slot(tuesday_window.id, NEXT_TUESDAY, physics.id, student.id)
    later = service.book_slot(
        tuesday_window.id, days_from_today(13), physics.id, other_student.id
    )
    assert later.starts_at == at(days_from_today(13), 14)


@pytest.mark.parametrize("offset", [0, -1, -30])
def test_today_or_earlier_is_rejected(service, tuesday_window, physics, student, offset):
    with pytest.raises(ValidationException) as exc_info:
        service.book_slot(tuesday_window.id, days_from_today(offset), physics.id, student.id)
    assert exc_info.value.details["field"] == "target_date"


def test_weekday_must_match_window(service, tuesday_window, physics, student):
    wednesday = days_from_today(7)
    with pytest.raises(ValidationException) as exc_info:
        service.book_slot(tuesday_window.id, wednesday, physics.id, student.id)
    assert exc_info.value.details["field"] == "target_date"
    assert exc_info.value.details["expected_weekday"] == 2
    assert exc_info.value.details["actual_weekday"] == 3


def test_tomorrow_is_the_first_bookable_day(service, db, physics, student):
    thursday = AvailabilityWindow(day_of_week=4, start_time=time(9, 0), end_time=time(10, 0))
    db.add(thursday)
    db.commit()

    lesson = service.book_slot(thursday.id, days_from_today(1), physics.id, student.id)

    assert lesson.starts_at == at(days_from_today(1), 9)
    assert lesson.value == Decimal("60.00")


@pytest.mark.parametrize(
    "missing,code",
    [("window", "WINDOW_NOT_FOUND"), ("subject", "SUBJECT_NOT_FOUND"), ("student", "STUDENT_NOT_FOUND")],
)
def test_missing_references(service, tuesday_window, physics, student, missing, code):
    ids = {"window": tuesday_window.id, "subject": physics.id, "student": student.id}
    ids[missing] = "01HNOTAREALIDXXXXXXXXXXXXX"

    with pytest.raises(NotFoundException) as exc_info:
        service.book_slot(ids["window"], NEXT_TUESDAY, ids["subject"], ids["student"])
    assert exc_info.value.code == code


def test_student_cannot_book_for_someone_else(
    service, tuesday_window, physics, student, other_student
):
    actor = CurrentUser(id="user-ana", role=RoleName.STUDENT, student_id=student.id)
    with pytest.raises(ForbiddenException):
        service.book_slot(tuesday_window.id, NEXT_TUESDAY, physics.id, other_student.id, actor)


def test_cancelled_lesson_does_not_block(service, tuesday_window, physics, student, make_lesson):
    make_lesson(at(NEXT_TUESDAY, 14), duration_minutes=120, status=LessonStatus.CANCELLED)

    lesson = service.book_slot(tuesday_window.id, NEXT_TUESDAY, physics.id, student.id)

    assert lesson.status == "scheduled"


@pytest.mark.parametrize("status", ["scheduled", "confirmed", "completed"])
def test_partial_overlap_with_booked_lesson_conflicts(
    service, tuesday_window, physics, student, make_lesson, status
):
    make_lesson(at(NEXT_TUESDAY, 15, 30), duration_minutes=60, status=status)

    with pytest.raises(BookingConflictException):
        service.book_slot(tuesday_window.id, NEXT_TUESDAY, physics.id, student.id)


def test_touching_lessons_do_not_conflict(service, tuesday_window, physics, student, make_lesson):
    make_lesson(at(NEXT_TUESDAY, 13), duration_minutes=60)
    make_lesson(at(NEXT_TUESDAY, 16), duration_minutes=60)

    lesson = service.book_slot(tuesday_window.id, NEXT_TUESDAY, physics.id, student.id)

    assert lesson.ends_at == at(NEXT_TUESDAY, 16)


def test_rate_is_configurable(db, clock, tuesday_window, physics, student):
    service = BookingService(db, clock=clock, hourly_rate=Decimal("75.00"))
    lesson = service.book_slot(tuesday_window.id, NEXT_TUESDAY, physics.id, student.id)
    assert lesson.value == Decimal("150.00")
