# backend/tutordesk/routes/v1/calendar.py
"""
Calendar routes - API v1

Endpoints:
    GET / - Lessons bucketed by date for a day, week or month view

Either pass ``start``/``end`` explicitly or an ``anchor`` date, from which the
visible range for the granularity is derived.
"""

import asyncio
from datetime import date
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...api.dependencies import get_calendar_service, get_clock, get_current_user
from ...auth import CurrentUser
from ...core.clock import Clock
from ...core.exceptions import DomainException
from ...domain.periods import Granularity, calendar_range
from ...errors import handle_domain_exception
from ...schemas.calendar import CalendarViewResponse
from ...services.calendar_service import CalendarService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["calendar-v1"])


@router.get("", response_model=CalendarViewResponse)
async def get_calendar_view(
    granularity: Granularity = Query(Granularity.WEEK),
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    anchor: Optional[date] = Query(None, description="Any date inside the wanted view"),
    student_id: Optional[str] = Query(None),
    current_user: CurrentUser = Depends(get_current_user),
    clock: Clock = Depends(get_clock),
    calendar_service: CalendarService = Depends(get_calendar_service),
) -> CalendarViewResponse:
    if start is None:
        start, default_end = calendar_range(anchor or clock.today(), granularity)
        end = end or default_end
    elif end is None:
        end = start if granularity is Granularity.DAY else calendar_range(start, granularity)[1]

    try:
        buckets = await asyncio.to_thread(
            calendar_service.get_calendar_view,
            start,
            end,
            granularity,
            student_id,
            current_user,
        )
    except DomainException as e:
        handle_domain_exception(e)
    visible_end = start if granularity is Granularity.DAY else end
    return CalendarViewResponse.from_buckets(granularity, start, visible_end, buckets)
