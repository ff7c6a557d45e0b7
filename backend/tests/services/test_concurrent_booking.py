"""
Two students race for the same slot from separate sessions.

Uses a file-backed SQLite database so each thread gets its own connection.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import time
import threading

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from tutordesk.core.clock import FixedClock
from tutordesk.core.enums import GradeLevel
from tutordesk.core.exceptions import BookingConflictException
from tutordesk.database import Base
from tutordesk.models import AvailabilityWindow, Lesson, Student, Subject
from tutordesk.services.booking_service import BookingService

from tests.helpers import FIXED_NOW, NEXT_TUESDAY


@pytest.fixture
def session_factory(tmp_path):
    race_engine = create_engine(
        f"sqlite:///{tmp_path / 'race.db'}", connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(bind=race_engine)
    yield sessionmaker(bind=race_engine, expire_on_commit=False)
    race_engine.dispose()


def test_only_one_of_two_concurrent_bookings_succeeds(session_factory):
    with session_factory() as seed:
        window = AvailabilityWindow(day_of_week=2, start_time=time(14, 0), end_time=time(16, 0))
        physics = Subject(name="Physics")
        s1 = Student(full_name="Ana Souza", grade_level=GradeLevel.GRADE_9.value)
        s2 = Student(full_name="Bruno Lima", grade_level=GradeLevel.GRADE_9.value)
        seed.add_all([window, physics, s1, s2])
        seed.commit()
        window_id, subject_id, student_ids = window.id, physics.id, [s1.id, s2.id]

    barrier = threading.Barrier(len(student_ids))

    def attempt(student_id):
        session = session_factory()
        try:
            service = BookingService(session, clock=FixedClock(FIXED_NOW))
            barrier.wait()
            lesson = service.book_slot(window_id, NEXT_TUESDAY, subject_id, student_id)
            return "booked", lesson.id
        except BookingConflictException:
            return "conflict", None
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=len(student_ids)) as pool:
        outcomes = list(pool.map(attempt, student_ids))

    assert sorted(outcome for outcome, _ in outcomes) == ["booked", "conflict"]
    with session_factory() as check:
        lessons = check.query(Lesson).all()
    assert len(lessons) == 1
    assert lessons[0].id == next(lesson_id for outcome, lesson_id in outcomes if lesson_id)
