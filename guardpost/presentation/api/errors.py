"""
Translation of domain exceptions to HTTP responses.

Response body is always {"error": <code>, "message": ..., "details": {...}}.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from guardpost.domain.exceptions import (
    AuthenticationException,
    CompanyExpiredError,
    CompanySuspendedError,
    DuplicateCompanyCodeError,
    GuardpostException,
    InvalidCompanyError,
    InvalidCredentialsError,
    MobileLoginRestrictedError,
    PermissionDeniedError,
    ResourceNotFoundException,
    SystemFailureError,
    ValidationException,
)
from guardpost.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

STATUS_CODES: dict[type[GuardpostException], int] = {
    InvalidCompanyError: status.HTTP_401_UNAUTHORIZED,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    AuthenticationException: status.HTTP_401_UNAUTHORIZED,
    CompanySuspendedError: status.HTTP_403_FORBIDDEN,
    CompanyExpiredError: status.HTTP_403_FORBIDDEN,
    MobileLoginRestrictedError: status.HTTP_403_FORBIDDEN,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    ResourceNotFoundException: status.HTTP_404_NOT_FOUND,
    DuplicateCompanyCodeError: status.HTTP_409_CONFLICT,
    ValidationException: status.HTTP_400_BAD_REQUEST,
    SystemFailureError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(exc: GuardpostException) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _is_debug(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return bool(settings and settings.debug)


async def guardpost_exception_handler(request: Request, exc: GuardpostException) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)

    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(status_code=status_code, content=exc.to_dict(), headers=headers)


def _system_error_response(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    error = SystemFailureError()
    if _is_debug(request):
        error.details = {"exception": type(exc).__name__, "reason": str(exc)}
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error.to_dict())


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    return _system_error_response(request, exc)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    return _system_error_response(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GuardpostException, guardpost_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
