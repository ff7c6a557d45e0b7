"""tutordesk - scheduling backend for a private tutoring practice."""

__version__ = "0.1.0"
