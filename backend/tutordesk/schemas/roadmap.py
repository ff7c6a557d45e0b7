"""Study roadmap schemas."""

from typing import Dict, List

from ..core.enums import Difficulty, GradeLevel
from ..models.study_topic import StudyTopic
from ._strict_base import StrictRequestModel
from .base import StandardizedModel


class StudyTopicResponse(StandardizedModel):
    id: str
    title: str
    grade_level: GradeLevel
    difficulty: Difficulty
    studied: bool


class StudyTopicProgressUpdate(StrictRequestModel):
    studied: bool


class RoadmapSubject(StandardizedModel):
    subject: str
    topics: List[StudyTopicResponse]
    studied_count: int


class RoadmapResponse(StandardizedModel):
    subjects: List[RoadmapSubject]

    @classmethod
    def from_grouped(cls, grouped: Dict[str, List[StudyTopic]]) -> "RoadmapResponse":
        subjects = []
        for name, topics in grouped.items():
            items = [StudyTopicResponse.model_validate(topic) for topic in topics]
            subjects.append(
                RoadmapSubject(
                    subject=name,
                    topics=items,
                    studied_count=sum(1 for item in items if item.studied),
                )
            )
        return cls(subjects=subjects)
