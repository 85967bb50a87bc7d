from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from guardpost.application.pagination import PageRequest
from guardpost.application.services.patrol_service import PatrolService
from guardpost.domain.enums import SecurityStatus
from guardpost.domain.value_objects import AccessScope
from guardpost.presentation.api.dependencies import (
    get_current_user,
    get_patrol_service,
    get_patrol_service_transactional,
)
from guardpost.presentation.api.v1.routes.pagination import page_request
from guardpost.presentation.api.v1.schemas.common import PaginatedResponse, paginated
from guardpost.presentation.api.v1.schemas.patrol import (
    PatrolCreate,
    PatrolResolutionUpdate,
    PatrolResponse,
    PatrolUpdate,
    ShiftStatusResponse,
)

router = APIRouter()


@router.get("", response_model=PaginatedResponse[PatrolResponse])
async def list_patrols(
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[PatrolService, Depends(get_patrol_service)],
    page: Annotated[PageRequest, Depends(page_request)],
    day: Annotated[date | None, Query(alias="date")] = None,
    security_status: SecurityStatus | None = None,
):
    """Patrols visible to the caller: the whole company for supervisors, own rows for guards"""
    result = await service.list_patrols(scope, page, day=day, security_status=security_status)
    return paginated(result, [PatrolResponse.model_validate(p) for p in result.items])


@router.post("", response_model=PatrolResponse, status_code=status.HTTP_201_CREATED)
async def log_patrol(
    data: PatrolCreate,
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[PatrolService, Depends(get_patrol_service_transactional)],
):
    patrol = await service.log_patrol(
        scope,
        location=data.location,
        security_status=data.security_status,
        notes=data.notes,
        attachments=data.attachments,
    )
    return PatrolResponse.model_validate(patrol)


@router.get("/recent", response_model=list[PatrolResponse])
async def recent_patrols(
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[PatrolService, Depends(get_patrol_service)],
    limit: Annotated[int, Query(ge=1, le=50)] = 5,
):
    return [PatrolResponse.model_validate(p) for p in await service.recent(scope, limit)]


@router.get("/shift-status", response_model=ShiftStatusResponse)
async def shift_status(
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[PatrolService, Depends(get_patrol_service)],
):
    """Today's patrol progress against the expected number of rounds"""
    return ShiftStatusResponse.model_validate(await service.shift_status(scope))


@router.get("/guard/{guard_id}", response_model=PaginatedResponse[PatrolResponse])
async def list_guard_patrols(
    guard_id: str,
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[PatrolService, Depends(get_patrol_service)],
    page: Annotated[PageRequest, Depends(page_request)],
):
    result = await service.list_for_guard(scope, guard_id, page)
    return paginated(result, [PatrolResponse.model_validate(p) for p in result.items])


@router.get("/{patrol_id}", response_model=PatrolResponse)
async def get_patrol(
    patrol_id: str,
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[PatrolService, Depends(get_patrol_service)],
):
    return PatrolResponse.model_validate(await service.get_patrol(scope, patrol_id))


@router.put("/{patrol_id}", response_model=PatrolResponse)
async def update_patrol(
    patrol_id: str,
    data: PatrolUpdate,
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[PatrolService, Depends(get_patrol_service_transactional)],
):
    patrol = await service.update_patrol(scope, patrol_id, data.model_dump(exclude_unset=True))
    return PatrolResponse.model_validate(patrol)


@router.put("/{patrol_id}/status", response_model=PatrolResponse)
async def update_patrol_resolution(
    patrol_id: str,
    data: PatrolResolutionUpdate,
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[PatrolService, Depends(get_patrol_service_transactional)],
):
    """Move a patrol through pending / in_progress / resolved (supervisor or admin)"""
    patrol = await service.set_resolution(scope, patrol_id, data.resolution_status)
    return PatrolResponse.model_validate(patrol)
