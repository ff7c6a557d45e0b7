# backend/tutordesk/schemas/availability.py
"""
Availability window schemas.

Windows are weekly: a weekday (0 = Sunday) plus a start and end time.
Times travel as ``HH:MM`` strings.
"""

from datetime import time
from typing import Dict

from pydantic import Field, field_serializer

from ._strict_base import StrictRequestModel
from .base import StandardizedModel, format_hhmm


class AvailabilityWindowCreate(StrictRequestModel):
    """
    Schema for adding a weekly window.

    Range and ordering checks run in AvailabilityService so they surface as
    400 validation errors naming the offending field.
    """

    day_of_week: int = Field(..., description="0 = Sunday ... 6 = Saturday")
    start_time: time = Field(..., description="Start time, HH:MM")
    end_time: time = Field(..., description="End time, HH:MM")


class AvailabilityWindowResponse(StandardizedModel):
    id: str
    day_of_week: int
    weekday_name: str
    start_time: time
    end_time: time
    duration_minutes: int

    @field_serializer("start_time", "end_time")
    def _serialize_time(self, value: time) -> str:
        return format_hhmm(value)


class FreeHoursResponse(StandardizedModel):
    """Open hours per weekday, keyed 0 (Sunday) to 6 (Saturday)."""

    hours_by_weekday: Dict[int, float]
    total_hours: float
