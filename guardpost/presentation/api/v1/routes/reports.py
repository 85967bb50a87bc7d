from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from guardpost.application.pagination import PageRequest
from guardpost.application.services.report_service import ReportService
from guardpost.domain.enums import ActivityEventType
from guardpost.domain.value_objects import AccessScope
from guardpost.presentation.api.dependencies import get_current_user, get_report_service
from guardpost.presentation.api.v1.routes.pagination import page_request
from guardpost.presentation.api.v1.schemas.common import PaginatedResponse, paginated
from guardpost.presentation.api.v1.schemas.report import (
    ActivityLogResponse,
    ReportSummaryResponse,
)

router = APIRouter()


@router.get("", response_model=PaginatedResponse[ActivityLogResponse])
async def list_activity(
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[ReportService, Depends(get_report_service)],
    page: Annotated[PageRequest, Depends(page_request)],
    from_date: date | None = None,
    to_date: date | None = None,
    event_type: ActivityEventType | None = None,
):
    """Activity log entries, inclusive date range filter"""
    result = await service.list_entries(
        scope, page, from_date=from_date, to_date=to_date, event_type=event_type
    )
    return paginated(result, [ActivityLogResponse.model_validate(e) for e in result.items])


@router.get("/recent", response_model=list[ActivityLogResponse])
async def recent_activity(
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[ReportService, Depends(get_report_service)],
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
):
    return [ActivityLogResponse.model_validate(e) for e in await service.recent(scope, limit)]


@router.get("/summary", response_model=ReportSummaryResponse)
async def report_summary(
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[ReportService, Depends(get_report_service)],
    from_date: date | None = None,
    to_date: date | None = None,
):
    summary = await service.summary(scope, from_date=from_date, to_date=to_date)
    return ReportSummaryResponse.model_validate(summary)
