# backend/tutordesk/models/subject.py
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
import ulid

from ..database import Base


class Subject(Base):
    """A subject taught by the tutor (Physics, Mathematics, ...)."""

    __tablename__ = "subjects"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    name = Column(String(120), nullable=False, unique=True)
    color = Column(String(16), nullable=False, default="#4f46e5")

    lessons = relationship("Lesson", back_populates="subject")
    study_topics = relationship("StudyTopic", back_populates="subject")

    def __repr__(self) -> str:
        return f"<Subject {self.name}>"
