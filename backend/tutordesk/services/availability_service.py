# backend/tutordesk/services/availability_service.py
"""
Availability Service

Manages the tutor's recurring weekly availability windows:
- Listing windows ordered by weekday and start time
- Adding a window with weekday/time-range validation
- Deleting a window (lessons booked from it are independent and stay)
- Free hours per weekday for the dashboard chart
"""

from datetime import time
import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundException, ValidationException
from ..models.availability import AvailabilityWindow
from ..repositories.availability_repository import AvailabilityRepository
from ..repositories.factory import RepositoryFactory
from .base import BaseService

logger = logging.getLogger(__name__)


class AvailabilityService(BaseService):
    def __init__(self, db: Session, repository: Optional[AvailabilityRepository] = None):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_availability_repository(db)

    @BaseService.measure_operation("list_windows")
    def list_windows(self) -> List[AvailabilityWindow]:
        return self.repository.list_ordered()

    def get_window(self, window_id: str) -> AvailabilityWindow:
        window = self.repository.get_by_id(window_id)
        if not window:
            raise NotFoundException(
                "Availability window not found",
                code="WINDOW_NOT_FOUND",
                details={"window_id": window_id},
            )
        return window

    @BaseService.measure_operation("add_window")
    def add_window(self, day_of_week: int, start_time: time, end_time: time) -> AvailabilityWindow:
        """
        Add a recurring weekly window.

        Raises:
            ValidationException: day_of_week outside 0..6, or start_time >= end_time
        """
        if not isinstance(day_of_week, int) or not 0 <= day_of_week <= 6:
            raise ValidationException(
                "day_of_week must be between 0 (Sunday) and 6 (Saturday)",
                field="day_of_week",
            )
        if start_time >= end_time:
            raise ValidationException(
                "start_time must be before end_time",
                field="end_time",
                details={"start_time": start_time.isoformat(), "end_time": end_time.isoformat()},
            )

        self.log_operation(
            "add_window", day_of_week=day_of_week, start_time=str(start_time), end_time=str(end_time)
        )
        with self.transaction():
            window = self.repository.create(
                day_of_week=day_of_week,
                start_time=start_time.replace(second=0, microsecond=0),
                end_time=end_time.replace(second=0, microsecond=0),
            )
        return window

    @BaseService.measure_operation("delete_window")
    def delete_window(self, window_id: str) -> None:
        """Remove a window outright. Existing lessons are not touched."""
        with self.transaction():
            deleted = self.repository.delete(window_id)
        if not deleted:
            raise NotFoundException(
                "Availability window not found",
                code="WINDOW_NOT_FOUND",
                details={"window_id": window_id},
            )
        self.log_operation("delete_window", window_id=window_id)

    def free_hours_by_weekday(self) -> Dict[int, float]:
        """Total open hours per weekday (0 = Sunday), every weekday present."""
        minutes = [0] * 7
        for window in self.repository.list_ordered():
            minutes[window.day_of_week] += window.duration_minutes
        return {weekday: total / 60 for weekday, total in enumerate(minutes)}
