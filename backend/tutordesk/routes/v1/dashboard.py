# backend/tutordesk/routes/v1/dashboard.py
"""
Dashboard routes - API v1

Endpoints:
    GET /indicators - Lesson counts, accrued value and worked hours for a period
    GET /worked-hours - Worked hours per weekday for a period
    GET /subject-distribution - Lessons per subject for a period
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, Query

from ...api.dependencies import get_period_indicators_service, require_admin
from ...auth import CurrentUser
from ...core.exceptions import DomainException
from ...domain.periods import Period
from ...errors import handle_domain_exception
from ...schemas.dashboard import (
    PeriodIndicatorsResponse,
    SubjectDistributionResponse,
    WorkedHoursResponse,
)
from ...services.period_indicators_service import PeriodIndicatorsService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dashboard-v1"])


@router.get("/indicators", response_model=PeriodIndicatorsResponse)
async def get_period_indicators(
    period: Period = Query(Period.THIS_MONTH),
    current_user: CurrentUser = Depends(require_admin),
    indicators_service: PeriodIndicatorsService = Depends(get_period_indicators_service),
) -> PeriodIndicatorsResponse:
    try:
        indicators = await asyncio.to_thread(indicators_service.get_period_indicators, period)
    except DomainException as e:
        handle_domain_exception(e)
    return PeriodIndicatorsResponse.build(period, indicators)


@router.get("/worked-hours", response_model=WorkedHoursResponse)
async def get_worked_hours(
    period: Period = Query(Period.THIS_WEEK),
    current_user: CurrentUser = Depends(require_admin),
    indicators_service: PeriodIndicatorsService = Depends(get_period_indicators_service),
) -> WorkedHoursResponse:
    try:
        hours = await asyncio.to_thread(indicators_service.get_worked_hours_by_weekday, period)
    except DomainException as e:
        handle_domain_exception(e)
    return WorkedHoursResponse(
        period=period, hours_by_weekday=hours, total_hours=sum(hours.values())
    )


@router.get("/subject-distribution", response_model=SubjectDistributionResponse)
async def get_subject_distribution(
    period: Period = Query(Period.THIS_MONTH),
    current_user: CurrentUser = Depends(require_admin),
    indicators_service: PeriodIndicatorsService = Depends(get_period_indicators_service),
) -> SubjectDistributionResponse:
    try:
        counts = await asyncio.to_thread(indicators_service.get_subject_distribution, period)
    except DomainException as e:
        handle_domain_exception(e)
    return SubjectDistributionResponse.from_counts(period, counts)
