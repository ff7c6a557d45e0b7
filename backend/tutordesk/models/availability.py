# backend/tutordesk/models/availability.py
"""
Availability models.

An AvailabilityWindow is a recurring weekly opening (weekday + time range),
never tied to a calendar date. Lessons do not reference windows: the booking
service copies the window's times into the lesson when it is booked, so
deleting or editing a window never touches existing lessons.

Weekdays follow the tutor's calendar convention: 0 = Sunday ... 6 = Saturday.
"""

from datetime import time

from sqlalchemy import CheckConstraint, Column, DateTime, Index, Integer, String, Time
from sqlalchemy.sql import func
import ulid

from ..database import Base

WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


class AvailabilityWindow(Base):
    """Recurring weekly time range in which students may book lessons."""

    __tablename__ = "availability_windows"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    day_of_week = Column(Integer, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_availability_day_of_week"),
        CheckConstraint("start_time < end_time", name="ck_availability_time_order"),
        Index("idx_availability_windows_day_start", "day_of_week", "start_time"),
    )

    @property
    def duration_minutes(self) -> int:
        return minutes_of_day(self.end_time) - minutes_of_day(self.start_time)

    @property
    def weekday_name(self) -> str:
        return WEEKDAY_NAMES[self.day_of_week]

    def __repr__(self) -> str:
        return (
            f"<AvailabilityWindow {self.weekday_name} "
            f"{self.start_time:%H:%M}-{self.end_time:%H:%M}>"
        )
