from datetime import date

import pytest

from tutordesk.auth import CurrentUser
from tutordesk.core.enums import RoleName
from tutordesk.core.exceptions import ForbiddenException
from tutordesk.domain.periods import Granularity
from tutordesk.models.lesson import LessonStatus
from tutordesk.services.calendar_service import CalendarService

from tests.helpers import WEEK_START, at


@pytest.fixture
def service(db):
    return CalendarService(db)


def test_week_view_from_the_ledger(service, make_lesson):
    late = make_lesson(at(date(2025, 3, 8), 23, 30), duration_minutes=60)
    cancelled = make_lesson(at(date(2025, 3, 4), 9), status=LessonStatus.CANCELLED)
    make_lesson(at(date(2025, 3, 9), 9))

    buckets = service.get_calendar_view(WEEK_START, date(2025, 3, 8), Granularity.WEEK)

    assert len(buckets) == 7
    assert buckets[date(2025, 3, 8)] == [late]
    assert buckets[date(2025, 3, 4)] == [cancelled]


def test_student_calendar_is_scoped(service, make_lesson, student, other_student):
    mine = make_lesson(at(date(2025, 3, 4), 9))
    make_lesson(at(date(2025, 3, 4), 11), student_id=other_student.id)
    actor = CurrentUser(id="user-ana", role=RoleName.STUDENT, student_id=student.id)

    buckets = service.get_calendar_view(
        date(2025, 3, 4), date(2025, 3, 4), Granularity.DAY, actor=actor
    )

    assert buckets == {date(2025, 3, 4): [mine]}
    with pytest.raises(ForbiddenException):
        service.get_calendar_view(
            date(2025, 3, 4), date(2025, 3, 4), "day", student_id=other_student.id, actor=actor
        )
