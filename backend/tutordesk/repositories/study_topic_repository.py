# backend/tutordesk/repositories/study_topic_repository.py
from typing import List

from sqlalchemy.orm import Session, joinedload

from ..models.study_topic import StudyTopic
from ..models.subject import Subject
from .base_repository import BaseRepository


class StudyTopicRepository(BaseRepository[StudyTopic]):
    def __init__(self, db: Session):
        super().__init__(db, StudyTopic)

    def list_for_student(self, student_id: str) -> List[StudyTopic]:
        query = (
            self._build_query()
            .join(StudyTopic.subject)
            .options(joinedload(StudyTopic.subject))
            .filter(StudyTopic.student_id == student_id)
            .order_by(Subject.name, StudyTopic.title)
        )
        return self._execute_query(query)
