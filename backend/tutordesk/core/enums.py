# backend/tutordesk/core/enums.py
"""
Core enums shared across models, schemas and services.
"""

from enum import Enum


class RoleName(str, Enum):
    """Roles handed to us by the identity provider."""

    ADMIN = "admin"
    STUDENT = "student"


class GradeLevel(str, Enum):
    """School year a student (or a study topic) belongs to."""

    GRADE_6 = "grade_6"
    GRADE_7 = "grade_7"
    GRADE_8 = "grade_8"
    GRADE_9 = "grade_9"
    HIGH_SCHOOL_1 = "high_school_1"
    HIGH_SCHOOL_2 = "high_school_2"
    HIGH_SCHOOL_3 = "high_school_3"
    HIGHER_EDUCATION = "higher_education"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
