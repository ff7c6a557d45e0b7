# backend/tutordesk/repositories/factory.py
"""
Repository Factory

Centralizes repository creation so services can be handed alternates in tests.
"""

from sqlalchemy.orm import Session

from ..models.student import Student
from ..models.subject import Subject
from .availability_repository import AvailabilityRepository
from .base_repository import BaseRepository
from .lesson_repository import LessonRepository
from .study_topic_repository import StudyTopicRepository


class RepositoryFactory:
    @staticmethod
    def create_availability_repository(db: Session) -> AvailabilityRepository:
        return AvailabilityRepository(db)

    @staticmethod
    def create_lesson_repository(db: Session) -> LessonRepository:
        return LessonRepository(db)

    @staticmethod
    def create_student_repository(db: Session) -> BaseRepository[Student]:
        return BaseRepository(db, Student)

    @staticmethod
    def create_subject_repository(db: Session) -> BaseRepository[Subject]:
        return BaseRepository(db, Subject)

    @staticmethod
    def create_study_topic_repository(db: Session) -> StudyTopicRepository:
        return StudyTopicRepository(db)
