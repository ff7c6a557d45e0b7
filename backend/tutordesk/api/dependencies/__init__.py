# backend/tutordesk/api/dependencies/__init__.py
"""
Central export point for all dependencies.
"""

from .auth import get_current_user, require_admin, require_student
from .database import get_db
from .services import (
    get_availability_service,
    get_booking_service,
    get_calendar_service,
    get_clock,
    get_lesson_service,
    get_period_indicators_service,
    get_roadmap_service,
)

__all__ = [
    # Auth
    "get_current_user",
    "require_admin",
    "require_student",
    # Database
    "get_db",
    # Services
    "get_clock",
    "get_availability_service",
    "get_booking_service",
    "get_calendar_service",
    "get_lesson_service",
    "get_period_indicators_service",
    "get_roadmap_service",
]
