# backend/tutordesk/routes/v1/bookings.py
"""
Booking routes - API v1

Endpoints:
    POST / - Book one occurrence of a weekly availability window
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, status

from ...api.dependencies import get_booking_service, get_current_user
from ...auth import CurrentUser
from ...core.exceptions import DomainException, ValidationException
from ...errors import handle_domain_exception
from ...schemas.lesson import BookSlotRequest, LessonResponse
from ...services.booking_service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bookings-v1"])


@router.post("", response_model=LessonResponse, status_code=status.HTTP_201_CREATED)
async def book_slot(
    payload: BookSlotRequest,
    current_user: CurrentUser = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> LessonResponse:
    """
    Book a lesson from an availability window.

    Students book for themselves (``student_id`` may be omitted); the tutor
    must name the student. A taken slot answers 409 BOOKING_CONFLICT.
    """
    try:
        student_id = payload.student_id or current_user.student_id
        if not student_id:
            raise ValidationException("student_id is required", field="student_id")
        lesson = await asyncio.to_thread(
            booking_service.book_slot,
            payload.window_id,
            payload.target_date,
            payload.subject_id,
            student_id,
            current_user,
        )
    except DomainException as e:
        handle_domain_exception(e)
    return LessonResponse.from_lesson(lesson)
