# backend/tutordesk/repositories/__init__.py
from .availability_repository import AvailabilityRepository
from .base_repository import BaseRepository
from .factory import RepositoryFactory
from .lesson_repository import LessonRepository
from .study_topic_repository import StudyTopicRepository

__all__ = [
    "AvailabilityRepository",
    "BaseRepository",
    "LessonRepository",
    "RepositoryFactory",
    "StudyTopicRepository",
]
