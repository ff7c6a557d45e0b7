# backend/tutordesk/services/roadmap_service.py
"""
Roadmap Service - study topics assigned to a student.

Students read their roadmap and tick topics off as studied. Topics themselves
are managed elsewhere.
"""

from collections import OrderedDict
import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from ..auth import CurrentUser
from ..core.exceptions import ForbiddenException, NotFoundException
from ..models.study_topic import StudyTopic
from ..repositories.factory import RepositoryFactory
from ..repositories.study_topic_repository import StudyTopicRepository
from .base import BaseService

logger = logging.getLogger(__name__)


class RoadmapService(BaseService):
    def __init__(self, db: Session, repository: Optional[StudyTopicRepository] = None):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_study_topic_repository(db)
        self.student_repository = RepositoryFactory.create_student_repository(db)

    def get_roadmap_for(self, actor: CurrentUser) -> Dict[str, List[StudyTopic]]:
        """Topics of the calling student grouped by subject name, subjects alphabetical."""
        self._ensure_student_actor(actor)
        if not self.student_repository.exists(id=actor.student_id):
            raise NotFoundException(
                "Student not found",
                code="STUDENT_NOT_FOUND",
                details={"student_id": actor.student_id},
            )

        grouped: Dict[str, List[StudyTopic]] = OrderedDict()
        for topic in self.repository.list_for_student(actor.student_id):
            grouped.setdefault(topic.subject.name, []).append(topic)
        return grouped

    @BaseService.measure_operation("mark_studied")
    def mark_studied(self, topic_id: str, studied: bool, actor: CurrentUser) -> StudyTopic:
        """
        Flag one of the caller's topics as studied (or back to pending).

        Raises:
            ForbiddenException: Caller is not a student, or the topic is not theirs
            NotFoundException: Topic does not exist
        """
        self._ensure_student_actor(actor)
        topic = self.repository.get_by_id(topic_id)
        if not topic:
            raise NotFoundException(
                "Study topic not found", code="TOPIC_NOT_FOUND", details={"topic_id": topic_id}
            )
        actor.ensure_can_act_for_student(topic.student_id)

        with self.transaction():
            topic.studied = bool(studied)
            self.repository.flush()
        self.log_operation("mark_studied", topic_id=topic_id, studied=topic.studied)
        return topic

    def _ensure_student_actor(self, actor: CurrentUser) -> None:
        if not actor.is_student:
            raise ForbiddenException("Only students have a study roadmap")
