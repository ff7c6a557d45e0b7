# backend/tutordesk/main.py
from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.constants import ALLOWED_ORIGINS, API_DESCRIPTION, API_PREFIX, API_TITLE, API_VERSION
from .errors import register_error_handlers
from .init_db import init_db
from .routes.v1 import availability, bookings, calendar, dashboard, health, lessons, students

# Configure logging
logging.basicConfig(
    level=settings.log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown."""
    logger.info(f"{API_TITLE} starting up...")
    logger.info(f"Environment: {settings.environment}, tutor timezone: {settings.tutor_timezone}")
    if settings.is_sqlite and not settings.is_testing:
        init_db()
    yield
    logger.info(f"{API_TITLE} shutting down...")


app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=app_lifespan,
)

register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create API v1 router
api_v1 = APIRouter(prefix=API_PREFIX)

# Mount v1 routes
api_v1.include_router(health.router)
api_v1.include_router(availability.router, prefix="/availability")
api_v1.include_router(bookings.router, prefix="/bookings")
api_v1.include_router(lessons.router, prefix="/lessons")
api_v1.include_router(dashboard.router, prefix="/dashboard")
api_v1.include_router(calendar.router, prefix="/calendar")
api_v1.include_router(students.router, prefix="/students")

app.include_router(api_v1)


@app.get("/")
def root() -> dict:
    return {"message": f"{API_TITLE} is running", "version": API_VERSION, "docs": "/docs"}
