"""HTTP surface for the lesson ledger, dashboard, calendar and roadmap."""

from decimal import Decimal

from tutordesk.api.dependencies import get_clock
from tutordesk.core.enums import Difficulty, GradeLevel
from tutordesk.main import app
from tutordesk.models import StudyTopic
from tutordesk.models.lesson import LessonStatus

from tests.helpers import (
    FIXED_NOW,
    NEXT_TUESDAY,
    WEEK_START,
    MidnightCrossingClock,
    at,
    days_from_today,
)


def test_admin_creates_and_edits_a_lesson(client, admin_headers, student, physics):
    created = client.post(
        "/api/v1/lessons",
        json={
            "starts_at": "2025-03-11T09:00:00",
            "duration_minutes": 60,
            "student_id": student.id,
            "subject_id": physics.id,
            "value": "65.00",
        },
        headers=admin_headers,
    )
    assert created.status_code == 201
    lesson_id = created.json()["id"]
    assert created.json()["ends_at"] == "2025-03-11T10:00:00"

    patched = client.patch(
        f"/api/v1/lessons/{lesson_id}",
        json={"duration_minutes": 90, "content_covered": "Vectors"},
        headers=admin_headers,
    )
    assert patched.status_code == 200
    assert patched.json()["ends_at"] == "2025-03-11T10:30:00"
    assert patched.json()["content_covered"] == "Vectors"


def test_offset_aware_start_is_converted_to_tutor_time(client, admin_headers, student, physics):
    created = client.post(
        "/api/v1/lessons",
        json={
            "starts_at": "2025-03-11T12:00:00Z",
            "duration_minutes": 60,
            "student_id": student.id,
            "subject_id": physics.id,
            "value": 60,
        },
        headers=admin_headers,
    )
    assert created.status_code == 201
    # America/Sao_Paulo is UTC-3 in March 2025
    assert created.json()["starts_at"] == "2025-03-11T09:00:00"


def test_overlapping_create_is_409(client, admin_headers, make_lesson, student, physics):
    make_lesson(at(NEXT_TUESDAY, 9), duration_minutes=120)
    response = client.post(
        "/api/v1/lessons",
        json={
            "starts_at": "2025-03-11T10:00:00",
            "duration_minutes": 60,
            "student_id": student.id,
            "subject_id": physics.id,
            "value": "60",
        },
        headers=admin_headers,
    )
    assert response.status_code == 409
    assert response.json()["code"] == "BOOKING_CONFLICT"


def test_status_transitions(client, admin_headers, make_lesson):
    lesson = make_lesson(at(days_from_today(-1), 9), status=LessonStatus.COMPLETED)

    response = client.post(
        f"/api/v1/lessons/{lesson.id}/status", json={"status": "scheduled"}, headers=admin_headers
    )

    assert response.status_code == 409
    problem = response.json()
    assert problem["code"] == "INVALID_TRANSITION"
    assert problem["errors"] == {"current_status": "completed", "requested_status": "scheduled"}


def test_confirm_lesson(client, admin_headers, make_lesson):
    lesson = make_lesson(at(NEXT_TUESDAY, 9))
    response = client.post(
        f"/api/v1/lessons/{lesson.id}/status", json={"status": "confirmed"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["status"] == "confirmed"


def test_students_cannot_change_status(client, student_headers, make_lesson):
    lesson = make_lesson(at(NEXT_TUESDAY, 9))
    response = client.post(
        f"/api/v1/lessons/{lesson.id}/status", json={"status": "cancelled"}, headers=student_headers
    )
    assert response.status_code == 403


def test_student_lists_only_own_lessons(
    client, student_headers, make_lesson, other_student
):
    own = make_lesson(at(NEXT_TUESDAY, 9))
    foreign = make_lesson(at(NEXT_TUESDAY, 11), student_id=other_student.id)

    listed = client.get("/api/v1/lessons", headers=student_headers)
    assert [l["id"] for l in listed.json()] == [own.id]

    assert client.get(f"/api/v1/lessons/{foreign.id}", headers=student_headers).status_code == 403


def test_list_filters(client, admin_headers, make_lesson):
    make_lesson(at(days_from_today(1), 9), status=LessonStatus.CONFIRMED)
    make_lesson(at(days_from_today(2), 9))

    response = client.get(
        "/api/v1/lessons",
        params={"status": "confirmed", "start": "2025-03-01T00:00:00", "end": "2025-04-01T00:00:00"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert [l["status"] for l in response.json()] == ["confirmed"]


def test_delete_lesson(client, admin_headers, make_lesson):
    lesson = make_lesson(at(NEXT_TUESDAY, 9))
    assert client.delete(f"/api/v1/lessons/{lesson.id}", headers=admin_headers).status_code == 204
    assert client.get(f"/api/v1/lessons/{lesson.id}", headers=admin_headers).status_code == 404


def test_dashboard_indicators(client, admin_headers, make_lesson):
    make_lesson(at(WEEK_START, 10), 90, LessonStatus.CONFIRMED, Decimal("90.00"))
    make_lesson(at(days_from_today(1), 10), 60, LessonStatus.CANCELLED, Decimal("60.00"))

    response = client.get(
        "/api/v1/dashboard/indicators", params={"period": "this_week"}, headers=admin_headers
    )

    assert response.status_code == 200
    body = response.json()
    assert body["range_start"] == "2025-03-02T00:00:00"
    assert body["range_end"] == "2025-03-09T00:00:00"
    assert body["total_worked_hours"] == 1.5
    assert body["total_accrued_value"] == 90.0
    assert body["confirmed_lesson_count"] == 1


def test_dashboard_is_admin_only(client, student_headers):
    response = client.get("/api/v1/dashboard/indicators", headers=student_headers)
    assert response.status_code == 403


def test_worked_hours(client, admin_headers, make_lesson):
    make_lesson(at(WEEK_START, 10), 90, LessonStatus.COMPLETED)
    body = client.get("/api/v1/dashboard/worked-hours", headers=admin_headers).json()
    assert body["hours_by_weekday"]["0"] == 1.5
    assert body["total_hours"] == 1.5


def test_calendar_week_view_defaults_to_current_week(client, admin_headers, make_lesson):
    make_lesson(at(days_from_today(1), 9))

    body = client.get("/api/v1/calendar", headers=admin_headers).json()

    assert body["granularity"] == "week"
    assert body["range_start"] == "2025-03-02"
    assert body["range_end"] == "2025-03-08"
    assert [d["day"] for d in body["days"]][0] == "2025-03-02"
    assert len(body["days"]) == 7
    thursday = next(d for d in body["days"] if d["day"] == "2025-03-06")
    assert len(thursday["lessons"]) == 1


def test_calendar_month_view(client, student_headers, make_lesson):
    make_lesson(at(days_from_today(1), 9))
    body = client.get(
        "/api/v1/calendar",
        params={"granularity": "month", "anchor": "2025-03-20"},
        headers=student_headers,
    ).json()
    assert len(body["days"]) == 31


def test_calendar_inverted_range(client, admin_headers):
    response = client.get(
        "/api/v1/calendar",
        params={"granularity": "week", "start": "2025-03-08", "end": "2025-03-02"},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["errors"]["field"] == "range_end"


def test_roadmap(client, db, student, physics, student_headers, admin_headers):
    db.add(
        StudyTopic(
            title="Kinematics",
            subject_id=physics.id,
            grade_level=GradeLevel.HIGH_SCHOOL_1.value,
            difficulty=Difficulty.EASY.value,
            student_id=student.id,
            studied=True,
        )
    )
    db.commit()

    body = client.get("/api/v1/students/me/roadmap", headers=student_headers).json()

    assert body["subjects"][0]["subject"] == "Physics"
    assert body["subjects"][0]["studied_count"] == 1
    assert body["subjects"][0]["topics"][0]["difficulty"] == "easy"
    assert client.get("/api/v1/students/me/roadmap", headers=admin_headers).status_code == 403


def _assign_topic(db, subject, student, title="Kinematics"):
    topic = StudyTopic(
        title=title,
        subject_id=subject.id,
        grade_level=GradeLevel.HIGH_SCHOOL_1.value,
        difficulty=Difficulty.MEDIUM.value,
        student_id=student.id,
    )
    db.add(topic)
    db.commit()
    return topic


def test_student_marks_topic_studied(client, db, student, physics, student_headers):
    topic = _assign_topic(db, physics, student)

    response = client.patch(
        f"/api/v1/students/me/roadmap/{topic.id}",
        json={"studied": True},
        headers=student_headers,
    )

    assert response.status_code == 200
    assert response.json()["studied"] is True
    body = client.get("/api/v1/students/me/roadmap", headers=student_headers).json()
    assert body["subjects"][0]["studied_count"] == 1


def test_student_cannot_mark_another_students_topic(
    client, db, other_student, physics, student_headers
):
    topic = _assign_topic(db, physics, other_student, title="Optics")

    response = client.patch(
        f"/api/v1/students/me/roadmap/{topic.id}",
        json={"studied": True},
        headers=student_headers,
    )

    assert response.status_code == 403
    assert response.json()["code"] == "OUTSIDE_OWN_SCOPE"


def test_topic_progress_rejects_unknown_fields(client, db, student, physics, student_headers):
    topic = _assign_topic(db, physics, student)

    response = client.patch(
        f"/api/v1/students/me/roadmap/{topic.id}",
        json={"studied": True, "title": "Renamed"},
        headers=student_headers,
    )

    assert response.status_code == 422


def test_indicator_range_matches_the_aggregated_day(client, admin_headers, make_lesson):
    make_lesson(at(days_from_today(0), 9), 60, LessonStatus.CONFIRMED)
    app.dependency_overrides[get_clock] = lambda: MidnightCrossingClock(FIXED_NOW)

    body = client.get(
        "/api/v1/dashboard/indicators", params={"period": "today"}, headers=admin_headers
    ).json()

    assert body["range_start"] == "2025-03-05T00:00:00"
    assert body["range_end"] == "2025-03-06T00:00:00"
    assert body["confirmed_lesson_count"] == 1


def test_subject_distribution(client, admin_headers, student_headers, make_lesson, math_subject):
    make_lesson(at(days_from_today(1), 9))
    make_lesson(at(days_from_today(2), 9), subject_id=math_subject.id)
    make_lesson(at(days_from_today(3), 9), subject_id=math_subject.id)

    response = client.get(
        "/api/v1/dashboard/subject-distribution",
        params={"period": "this_week"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["period"] == "this_week"
    assert body["subjects"] == [
        {"subject": "Math", "lesson_count": 2},
        {"subject": "Physics", "lesson_count": 1},
    ]
    assert body["total_lessons"] == 3
    forbidden = client.get("/api/v1/dashboard/subject-distribution", headers=student_headers)
    assert forbidden.status_code == 403
