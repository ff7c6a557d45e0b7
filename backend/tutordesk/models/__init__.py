# backend/tutordesk/models/__init__.py
"""
Database models.

Importing this package registers every table on ``Base.metadata``.
"""

from .availability import AvailabilityWindow
from .lesson import Lesson, LessonStatus
from .student import Student
from .study_topic import StudyTopic
from .subject import Subject

__all__ = [
    "AvailabilityWindow",
    "Lesson",
    "LessonStatus",
    "Student",
    "StudyTopic",
    "Subject",
]
