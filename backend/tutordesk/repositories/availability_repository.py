# backend/tutordesk/repositories/availability_repository.py
from typing import List

from sqlalchemy.orm import Session

from ..models.availability import AvailabilityWindow
from .base_repository import BaseRepository


class AvailabilityRepository(BaseRepository[AvailabilityWindow]):
    """Data access for the recurring weekly availability windows."""

    def __init__(self, db: Session):
        super().__init__(db, AvailabilityWindow)

    def list_ordered(self) -> List[AvailabilityWindow]:
        query = self._build_query().order_by(
            AvailabilityWindow.day_of_week, AvailabilityWindow.start_time
        )
        return self._execute_query(query)
