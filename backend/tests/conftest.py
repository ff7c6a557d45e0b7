# backend/tests/conftest.py
"""
Pytest configuration.

Every test runs against a fresh in-memory SQLite database. The clock is
pinned to Wednesday 2025-03-05 10:00 (tutor-local), so "next Tuesday" is
2025-03-11 and "this week" is Sunday 2025-03-02 .. Saturday 2025-03-08.
"""

import os

# Set testing mode BEFORE any tutordesk imports
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["IS_TESTING"] = "true"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DEFAULT_HOURLY_RATE"] = "60.00"
os.environ["TUTOR_TIMEZONE"] = "America/Sao_Paulo"

from datetime import datetime, time
from decimal import Decimal
from typing import Callable

from fastapi.testclient import TestClient
import pytest
from sqlalchemy.orm import Session

from tutordesk.api.dependencies.database import get_db
from tutordesk.api.dependencies.services import get_clock
from tutordesk.auth import create_access_token
from tutordesk.core.clock import FixedClock
from tutordesk.core.enums import GradeLevel, RoleName
from tutordesk.database import Base, SessionLocal, engine
from tutordesk.main import app
from tutordesk.models import AvailabilityWindow, Lesson, Student, Subject
from tutordesk.models.lesson import LessonStatus

from tests.helpers import FIXED_NOW


@pytest.fixture
def db():
    """Fresh schema and session per test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    yield session
    session.rollback()
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(FIXED_NOW)


@pytest.fixture
def student(db: Session) -> Student:
    s1 = Student(full_name="Ana Souza", grade_level=GradeLevel.HIGH_SCHOOL_2.value)
    db.add(s1)
    db.commit()
    return s1


@pytest.fixture
def other_student(db: Session) -> Student:
    s2 = Student(full_name="Bruno Lima", grade_level=GradeLevel.GRADE_9.value)
    db.add(s2)
    db.commit()
    return s2


@pytest.fixture
def physics(db: Session) -> Subject:
    subject = Subject(name="Physics", color="#2563eb")
    db.add(subject)
    db.commit()
    return subject


@pytest.fixture
def math_subject(db: Session) -> Subject:
    subject = Subject(name="Math", color="#16a34a")
    db.add(subject)
    db.commit()
    return subject


@pytest.fixture
def tuesday_window(db: Session) -> AvailabilityWindow:
    """Tuesdays 14:00-16:00."""
    window = AvailabilityWindow(day_of_week=2, start_time=time(14, 0), end_time=time(16, 0))
    db.add(window)
    db.commit()
    return window


@pytest.fixture
def make_lesson(db: Session, student: Student, physics: Subject) -> Callable[..., Lesson]:
    """Insert a lesson directly, bypassing the services."""

    def _make(
        starts_at: datetime,
        duration_minutes: int = 60,
        status: LessonStatus = LessonStatus.SCHEDULED,
        value: Decimal = Decimal("60.00"),
        student_id: str = None,
        subject_id: str = None,
    ) -> Lesson:
        lesson = Lesson(
            starts_at=starts_at,
            duration_minutes=duration_minutes,
            status=LessonStatus(status).value,
            value=value,
            student_id=student_id or student.id,
            subject_id=subject_id or physics.id,
        )
        db.add(lesson)
        db.commit()
        return lesson

    return _make


@pytest.fixture
def client(db: Session, clock: FixedClock):
    """Create a test client bound to the test session and the fixed clock."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock

    test_client = TestClient(app)

    yield test_client

    app.dependency_overrides.clear()
    test_client.close()


def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers() -> dict:
    return _bearer(create_access_token("tutor-1", RoleName.ADMIN))


@pytest.fixture
def student_headers(student: Student) -> dict:
    return _bearer(create_access_token("user-ana", RoleName.STUDENT, student_id=student.id))


@pytest.fixture
def other_student_headers(other_student: Student) -> dict:
    return _bearer(create_access_token("user-bruno", RoleName.STUDENT, student_id=other_student.id))

