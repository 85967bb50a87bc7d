from typing import Annotated

from fastapi import APIRouter, Depends

from guardpost.application.services.permission_service import PermissionService
from guardpost.domain.enums import PermissionName
from guardpost.domain.value_objects import AccessScope
from guardpost.presentation.api.dependencies import (
    get_current_user,
    get_permission_service,
    get_permission_service_transactional,
)
from guardpost.presentation.api.v1.schemas.permission import (
    PermissionMatrixResponse,
    PermissionToggleRequest,
    PermissionToggleResponse,
)

router = APIRouter()


@router.get("", response_model=PermissionMatrixResponse)
async def list_permissions(
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[PermissionService, Depends(get_permission_service)],
):
    """Permission grants of the caller's company, grouped by role"""
    return PermissionMatrixResponse(
        roles=await service.list_permissions(scope),
        available_permissions=PermissionName.values(),
    )


@router.post("/toggle", response_model=PermissionToggleResponse)
async def toggle_permission(
    data: PermissionToggleRequest,
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[PermissionService, Depends(get_permission_service_transactional)],
):
    """Grant the permission to the role if absent, revoke it if present"""
    result = await service.toggle(scope, data.role, data.permission)
    return PermissionToggleResponse(
        role=result.role, permission=result.permission, active=result.active
    )
