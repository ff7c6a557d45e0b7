# backend/tutordesk/models/study_topic.py
from sqlalchemy import Boolean, Column, ForeignKey, String
from sqlalchemy.orm import relationship
import ulid

from ..core.enums import Difficulty
from ..database import Base


class StudyTopic(Base):
    """A topic on a student's study roadmap. Unassigned topics have no student."""

    __tablename__ = "study_topics"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    title = Column(String(255), nullable=False)
    subject_id = Column(String(26), ForeignKey("subjects.id"), nullable=False)
    grade_level = Column(String(32), nullable=False)
    difficulty = Column(String(10), nullable=False, default=Difficulty.MEDIUM.value)
    student_id = Column(String(26), ForeignKey("students.id"), nullable=True, index=True)
    studied = Column(Boolean, nullable=False, default=False)

    subject = relationship("Subject", back_populates="study_topics")
    student = relationship("Student", back_populates="study_topics")

    def __repr__(self) -> str:
        return f"<StudyTopic {self.title} studied={self.studied}>"
