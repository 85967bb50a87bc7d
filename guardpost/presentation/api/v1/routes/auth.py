from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from guardpost.application.services.session_service import SessionService
from guardpost.domain.value_objects import AccessScope
from guardpost.presentation.api.dependencies import (
    get_current_user,
    get_session_service,
    get_session_service_transactional,
)
from guardpost.presentation.api.v1.schemas.common import MessageResponse
from guardpost.presentation.api.v1.schemas.token import LoginRequest, LoginResponse
from guardpost.presentation.api.v1.schemas.user import UserResponse
from guardpost.presentation.middleware.rate_limit import limiter, login_rate_limit
from guardpost.shared.utils import is_mobile_user_agent

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
@limiter.limit(login_rate_limit)
async def login(
    request: Request,  # Required by slowapi for rate limiting (extracts remote address)
    credentials: LoginRequest,
    service: Annotated[SessionService, Depends(get_session_service_transactional)],
):
    """
    Issue a session token for company code + username + password.

    Mobile devices (detected from User-Agent) additionally need the
    mobile_login permission, a per-user override, or an admin role.
    """
    result = await service.authenticate(
        company_code=credentials.company_code,
        username=credentials.username,
        password=credentials.password,
        device_is_mobile=is_mobile_user_agent(request.headers.get("user-agent")),
    )
    return LoginResponse(
        access_token=result.access_token,
        token_type=result.token_type,
        expires_in=result.expires_in,
        user=UserResponse.model_validate(result.user),
    )


@router.post("/logout", response_model=MessageResponse, status_code=status.HTTP_200_OK)
async def logout(
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[SessionService, Depends(get_session_service_transactional)],
):
    await service.logout(scope)
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=UserResponse)
async def me(
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[SessionService, Depends(get_session_service)],
):
    """The authenticated user's own record"""
    return UserResponse.model_validate(await service.me(scope))
