# backend/tutordesk/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

Services get a request-scoped session and, where they read "today", the
shared clock. Tests override ``get_db`` and ``get_clock``.
"""

import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from ...core.clock import Clock, SystemClock
from ...services.availability_service import AvailabilityService
from ...services.booking_service import BookingService
from ...services.calendar_service import CalendarService
from ...services.lesson_service import LessonService
from ...services.period_indicators_service import PeriodIndicatorsService
from ...services.roadmap_service import RoadmapService
from .database import get_db

logger = logging.getLogger(__name__)

_system_clock = SystemClock()


def get_clock() -> Clock:
    return _system_clock


def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    return AvailabilityService(db)


def get_lesson_service(db: Session = Depends(get_db)) -> LessonService:
    return LessonService(db)


def get_booking_service(
    db: Session = Depends(get_db), clock: Clock = Depends(get_clock)
) -> BookingService:
    """
    Get BookingService instance with proper dependencies.

    Args:
        db: Database session
        clock: Source of "today" for the future-date rule

    Returns:
        BookingService instance
    """
    return BookingService(db, clock=clock)


def get_period_indicators_service(
    db: Session = Depends(get_db), clock: Clock = Depends(get_clock)
) -> PeriodIndicatorsService:
    return PeriodIndicatorsService(db, clock=clock)


def get_calendar_service(db: Session = Depends(get_db)) -> CalendarService:
    return CalendarService(db)


def get_roadmap_service(db: Session = Depends(get_db)) -> RoadmapService:
    return RoadmapService(db)
