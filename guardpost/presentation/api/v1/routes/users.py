from typing import Annotated

from fastapi import APIRouter, Depends, status

from guardpost.application.pagination import PageRequest
from guardpost.application.services.user_service import UserService
from guardpost.domain.value_objects import AccessScope
from guardpost.presentation.api.dependencies import (
    get_current_user,
    get_user_service,
    get_user_service_transactional,
    require_supervisor,
)
from guardpost.presentation.api.v1.routes.pagination import page_request
from guardpost.presentation.api.v1.schemas.common import PaginatedResponse, paginated
from guardpost.presentation.api.v1.schemas.user import (
    UserCreate,
    UserResponse,
    UserUpdate,
    UserWithStats,
)

router = APIRouter()


@router.get("", response_model=PaginatedResponse[UserWithStats])
async def list_users(
    scope: Annotated[AccessScope, Depends(require_supervisor)],
    service: Annotated[UserService, Depends(get_user_service)],
    page: Annotated[PageRequest, Depends(page_request)],
):
    """Users of the caller's company with patrol counts (supervisor or admin)"""
    result = await service.list_users(scope, page)
    items = [
        UserWithStats(
            **UserResponse.model_validate(user).model_dump(), patrol_count=patrol_count
        )
        for user, patrol_count in result.items
    ]
    return paginated(result, items)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[UserService, Depends(get_user_service_transactional)],
):
    user = await service.create_user(
        scope,
        username=data.username,
        password=data.password,
        full_name=data.full_name,
        role=data.role.value,
        email=data.email,
        unit_number=data.unit_number,
        mobile_login_allowed=data.mobile_login_allowed,
    )
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[UserService, Depends(get_user_service)],
):
    return UserResponse.model_validate(await service.get_user(scope, user_id))


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    data: UserUpdate,
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[UserService, Depends(get_user_service_transactional)],
):
    changes = data.model_dump(exclude_unset=True)
    if changes.get("role") is not None:
        changes["role"] = changes["role"].value
    user = await service.update_user(scope, user_id, changes)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[UserService, Depends(get_user_service_transactional)],
):
    """
    Delete a user of the caller's company.

    The user's patrols are removed; visitors they registered are kept with
    registered_by cleared.
    """
    await service.delete_user(scope, user_id)
