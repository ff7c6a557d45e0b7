# backend/tutordesk/routes/v1/availability.py
"""
Availability routes - API v1

Weekly windows in which the tutor accepts lessons.

Endpoints:
    GET / - List windows ordered by weekday and start time
    POST / - Add a window (admin)
    GET /free-hours - Open hours per weekday (admin)
    DELETE /{window_id} - Remove a window (admin)
"""

import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status

from ...api.dependencies import get_availability_service, get_current_user, require_admin
from ...auth import CurrentUser
from ...core.exceptions import DomainException
from ...errors import handle_domain_exception
from ...schemas.availability import (
    AvailabilityWindowCreate,
    AvailabilityWindowResponse,
    FreeHoursResponse,
)
from ...services.availability_service import AvailabilityService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["availability-v1"])


@router.get("", response_model=List[AvailabilityWindowResponse])
async def list_windows(
    current_user: CurrentUser = Depends(get_current_user),
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> List[AvailabilityWindowResponse]:
    windows = await asyncio.to_thread(availability_service.list_windows)
    return [AvailabilityWindowResponse.model_validate(window) for window in windows]


@router.post("", response_model=AvailabilityWindowResponse, status_code=status.HTTP_201_CREATED)
async def add_window(
    payload: AvailabilityWindowCreate,
    current_user: CurrentUser = Depends(require_admin),
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> AvailabilityWindowResponse:
    try:
        window = await asyncio.to_thread(
            availability_service.add_window,
            payload.day_of_week,
            payload.start_time,
            payload.end_time,
        )
    except DomainException as e:
        handle_domain_exception(e)
    return AvailabilityWindowResponse.model_validate(window)


@router.get("/free-hours", response_model=FreeHoursResponse)
async def get_free_hours(
    current_user: CurrentUser = Depends(require_admin),
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> FreeHoursResponse:
    hours = await asyncio.to_thread(availability_service.free_hours_by_weekday)
    return FreeHoursResponse(hours_by_weekday=hours, total_hours=sum(hours.values()))


@router.delete("/{window_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_window(
    window_id: str,
    current_user: CurrentUser = Depends(require_admin),
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> Response:
    try:
        await asyncio.to_thread(availability_service.delete_window, window_id)
    except DomainException as e:
        handle_domain_exception(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
