# backend/tutordesk/routes/v1/__init__.py
"""
API v1 Routes

Versioned API endpoints under /api/v1, mounted by main.py.
"""

from . import availability, bookings, calendar, dashboard, health, lessons, students

__all__ = [
    "availability",
    "bookings",
    "calendar",
    "dashboard",
    "health",
    "lessons",
    "students",
]
