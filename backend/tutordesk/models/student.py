# backend/tutordesk/models/student.py
"""
Student directory model.

Student records are maintained by the tutor's CRUD screens; the scheduling
core only needs them to exist so lessons can reference them.
"""

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    full_name = Column(String(255), nullable=False)
    grade_level = Column(String(32), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(32), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    lessons = relationship("Lesson", back_populates="student")
    study_topics = relationship("StudyTopic", back_populates="student")

    def __repr__(self) -> str:
        return f"<Student {self.id}: {self.full_name}>"
