from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from guardpost.application.pagination import PageRequest
from guardpost.application.services.visitor_service import VisitorService
from guardpost.domain.enums import VisitorStatus
from guardpost.domain.value_objects import AccessScope
from guardpost.presentation.api.dependencies import (
    get_current_user,
    get_visitor_service,
    get_visitor_service_transactional,
)
from guardpost.presentation.api.v1.routes.pagination import page_request
from guardpost.presentation.api.v1.schemas.common import PaginatedResponse, paginated
from guardpost.presentation.api.v1.schemas.visitor import (
    VisitorCreate,
    VisitorResponse,
    VisitorStatsResponse,
)

router = APIRouter()


@router.get("", response_model=PaginatedResponse[VisitorResponse])
async def list_visitors(
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[VisitorService, Depends(get_visitor_service)],
    page: Annotated[PageRequest, Depends(page_request)],
    day: Annotated[date | None, Query(alias="date")] = None,
    visitor_status: Annotated[VisitorStatus | None, Query(alias="status")] = None,
    search: Annotated[str | None, Query(max_length=100)] = None,
):
    result = await service.list_visitors(
        scope, page, day=day, status=visitor_status, search=search
    )
    return paginated(result, [VisitorResponse.model_validate(v) for v in result.items])


@router.post("", response_model=VisitorResponse, status_code=status.HTTP_201_CREATED)
async def register_visitor(
    data: VisitorCreate,
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[VisitorService, Depends(get_visitor_service_transactional)],
):
    visitor = await service.register_entry(scope, **data.model_dump())
    return VisitorResponse.model_validate(visitor)


@router.get("/today", response_model=PaginatedResponse[VisitorResponse])
async def todays_visitors(
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[VisitorService, Depends(get_visitor_service)],
    page: Annotated[PageRequest, Depends(page_request)],
):
    result = await service.today(scope, page)
    return paginated(result, [VisitorResponse.model_validate(v) for v in result.items])


@router.get("/stats", response_model=VisitorStatsResponse)
async def visitor_stats(
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[VisitorService, Depends(get_visitor_service)],
):
    """Today's visitor counts compared with yesterday"""
    return VisitorStatsResponse.model_validate(await service.stats(scope))


@router.get("/{visitor_id}", response_model=VisitorResponse)
async def get_visitor(
    visitor_id: str,
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[VisitorService, Depends(get_visitor_service)],
):
    return VisitorResponse.model_validate(await service.get_visitor(scope, visitor_id))


@router.put("/{visitor_id}/checkout", response_model=VisitorResponse)
async def checkout_visitor(
    visitor_id: str,
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[VisitorService, Depends(get_visitor_service_transactional)],
):
    return VisitorResponse.model_validate(await service.checkout(scope, visitor_id))
