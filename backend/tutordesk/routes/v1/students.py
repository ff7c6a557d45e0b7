# backend/tutordesk/routes/v1/students.py
"""
Student self-service routes - API v1

Endpoints:
    GET /me/roadmap - Study topics assigned to the calling student
    PATCH /me/roadmap/{topic_id} - Mark one of those topics studied or pending
"""

import asyncio
import logging

from fastapi import APIRouter, Depends

from ...api.dependencies import get_roadmap_service, require_student
from ...auth import CurrentUser
from ...core.exceptions import DomainException
from ...errors import handle_domain_exception
from ...schemas.roadmap import RoadmapResponse, StudyTopicProgressUpdate, StudyTopicResponse
from ...services.roadmap_service import RoadmapService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["students-v1"])


@router.get("/me/roadmap", response_model=RoadmapResponse)
async def get_my_roadmap(
    current_user: CurrentUser = Depends(require_student),
    roadmap_service: RoadmapService = Depends(get_roadmap_service),
) -> RoadmapResponse:
    try:
        grouped = await asyncio.to_thread(roadmap_service.get_roadmap_for, current_user)
    except DomainException as e:
        handle_domain_exception(e)
    return RoadmapResponse.from_grouped(grouped)


@router.patch("/me/roadmap/{topic_id}", response_model=StudyTopicResponse)
async def update_topic_progress(
    topic_id: str,
    payload: StudyTopicProgressUpdate,
    current_user: CurrentUser = Depends(require_student),
    roadmap_service: RoadmapService = Depends(get_roadmap_service),
) -> StudyTopicResponse:
    try:
        topic = await asyncio.to_thread(
            roadmap_service.mark_studied, topic_id, payload.studied, current_user
        )
    except DomainException as e:
        handle_domain_exception(e)
    return StudyTopicResponse.model_validate(topic)
