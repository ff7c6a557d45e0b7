"""Application-wide constants for the tutordesk API."""

API_TITLE = "tutordesk API"
API_DESCRIPTION = "Scheduling backend for a private tutor: availability, bookings and lessons."
API_VERSION = "1.0.0"
API_PREFIX = "/api/v1"

# Local frontends allowed to call the API during development
ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
