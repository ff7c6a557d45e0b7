# backend/tutordesk/routes/v1/lessons.py
"""
Lesson routes - API v1

The lesson ledger. Students may read their own lessons; every write is the
tutor's.

Endpoints:
    GET / - List lessons (date range, student, status filters)
    POST / - Schedule a lesson directly (admin)
    GET /{lesson_id} - Lesson details
    PATCH /{lesson_id} - Edit lesson fields (admin)
    POST /{lesson_id}/status - Move through the lesson lifecycle (admin)
    DELETE /{lesson_id} - Remove a lesson (admin)
"""

import asyncio
from datetime import datetime
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ...api.dependencies import get_current_user, get_lesson_service, require_admin
from ...auth import CurrentUser
from ...core.exceptions import DomainException
from ...errors import handle_domain_exception
from ...models.lesson import LessonStatus
from ...schemas.lesson import LessonCreate, LessonResponse, LessonStatusUpdate, LessonUpdate
from ...services.lesson_service import LessonService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["lessons-v1"])


@router.get("", response_model=List[LessonResponse])
async def list_lessons(
    start: Optional[datetime] = Query(None, description="Lessons starting at or after"),
    end: Optional[datetime] = Query(None, description="Lessons starting before"),
    student_id: Optional[str] = Query(None),
    lesson_status: Optional[LessonStatus] = Query(None, alias="status"),
    current_user: CurrentUser = Depends(get_current_user),
    lesson_service: LessonService = Depends(get_lesson_service),
) -> List[LessonResponse]:
    try:
        lessons = await asyncio.to_thread(
            lesson_service.list_lessons,
            start=start,
            end=end,
            student_id=student_id,
            status=lesson_status,
            actor=current_user,
        )
    except DomainException as e:
        handle_domain_exception(e)
    return [LessonResponse.from_lesson(lesson) for lesson in lessons]


@router.post("", response_model=LessonResponse, status_code=status.HTTP_201_CREATED)
async def create_lesson(
    payload: LessonCreate,
    current_user: CurrentUser = Depends(require_admin),
    lesson_service: LessonService = Depends(get_lesson_service),
) -> LessonResponse:
    try:
        lesson = await asyncio.to_thread(
            lesson_service.create_lesson, **payload.model_dump()
        )
    except DomainException as e:
        handle_domain_exception(e)
    return LessonResponse.from_lesson(lesson)


@router.get("/{lesson_id}", response_model=LessonResponse)
async def get_lesson(
    lesson_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    lesson_service: LessonService = Depends(get_lesson_service),
) -> LessonResponse:
    try:
        lesson = await asyncio.to_thread(lesson_service.get_lesson, lesson_id, current_user)
    except DomainException as e:
        handle_domain_exception(e)
    return LessonResponse.from_lesson(lesson)


@router.patch("/{lesson_id}", response_model=LessonResponse)
async def update_lesson(
    lesson_id: str,
    payload: LessonUpdate,
    current_user: CurrentUser = Depends(require_admin),
    lesson_service: LessonService = Depends(get_lesson_service),
) -> LessonResponse:
    try:
        lesson = await asyncio.to_thread(
            lesson_service.update_lesson, lesson_id, payload.changes()
        )
    except DomainException as e:
        handle_domain_exception(e)
    return LessonResponse.from_lesson(lesson)


@router.post("/{lesson_id}/status", response_model=LessonResponse)
async def update_lesson_status(
    lesson_id: str,
    payload: LessonStatusUpdate,
    current_user: CurrentUser = Depends(require_admin),
    lesson_service: LessonService = Depends(get_lesson_service),
) -> LessonResponse:
    """Confirm, complete or cancel a lesson. Illegal moves answer 409 INVALID_TRANSITION."""
    try:
        lesson = await asyncio.to_thread(
            lesson_service.update_lesson_status, lesson_id, payload.status, current_user
        )
    except DomainException as e:
        handle_domain_exception(e)
    return LessonResponse.from_lesson(lesson)


@router.delete("/{lesson_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_lesson(
    lesson_id: str,
    current_user: CurrentUser = Depends(require_admin),
    lesson_service: LessonService = Depends(get_lesson_service),
) -> Response:
    try:
        await asyncio.to_thread(lesson_service.delete_lesson, lesson_id)
    except DomainException as e:
        handle_domain_exception(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
