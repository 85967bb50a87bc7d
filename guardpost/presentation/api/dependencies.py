from collections.abc import AsyncIterator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from guardpost.application.services.activity_log_service import ActivityLogService
from guardpost.application.services.authorization_service import AuthorizationService
from guardpost.application.services.company_initialization_service import (
    CompanyInitializationService,
)
from guardpost.application.services.company_provisioning_service import (
    CompanyProvisioningService,
)
from guardpost.application.services.location_service import LocationService
from guardpost.application.services.patrol_service import PatrolService
from guardpost.application.services.permission_service import PermissionService
from guardpost.application.services.report_service import ReportService
from guardpost.application.services.session_service import SessionService
from guardpost.application.services.user_service import UserService
from guardpost.application.services.visitor_service import VisitorService
from guardpost.domain.exceptions import AuthenticationException, PermissionDeniedError
from guardpost.domain.policies import GATE_MESSAGES, RoleGate, passes_gate
from guardpost.domain.value_objects import AccessScope
from guardpost.infrastructure.config.settings import Settings
from guardpost.infrastructure.persistence.database import Database
from guardpost.infrastructure.persistence.repositories import (
    ActivityLogRepository,
    CompanyRepository,
    LocationRepository,
    PatrolRepository,
    PermissionRepository,
    UserRepository,
    VisitorRepository,
)
from guardpost.infrastructure.security.jwt import verify_token
from guardpost.presentation.api.v1.schemas.token import TokenPayload

security = HTTPBearer(auto_error=False)


def get_database(request: Request) -> Database:
    """Database handle created by the application factory"""
    return request.app.state.database


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_db(database: Database = Depends(get_database)) -> AsyncIterator[AsyncSession]:
    """
    Database session dependency for read operations.
    Does not commit - write operations should use get_db_transactional().
    """
    async with database.session() as session:
        yield session


async def get_db_transactional(
    database: Database = Depends(get_database),
) -> AsyncIterator[AsyncSession]:
    """
    Database session dependency for write operations.
    - Commits on success
    - Rolls back on exception

    Use this for POST, PUT, PATCH, DELETE endpoints.
    """
    async with database.transaction() as session:
        yield session


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_app_settings),
) -> AccessScope:
    """
    Verify the bearer session token and return the caller's access scope.
    Company and role come only from the signed token, never from headers or body.
    """
    if credentials is None:
        raise AuthenticationException("Authentication required")

    try:
        payload = verify_token(
            credentials.credentials, secret_key=settings.secret_key, algorithm=settings.algorithm
        )
        claims = TokenPayload(**payload)
    except (ValueError, ValidationError) as e:
        raise AuthenticationException("Invalid or expired token") from e

    return AccessScope(
        user_id=claims.sub,
        company_id=claims.company_id,
        role=claims.role,
        username=claims.username,
        full_name=claims.full_name,
        unit_number=claims.unit_number,
    )


def require_role(gate: RoleGate):
    """
    Dependency factory for route-level role gates.

    Usage:
        @router.get("/", dependencies=[Depends(require_role(RoleGate.SUPERVISOR))])
    """

    async def role_checker(scope: AccessScope = Depends(get_current_user)) -> AccessScope:
        if not passes_gate(scope.role, gate):
            raise PermissionDeniedError(GATE_MESSAGES[gate])
        return scope

    return role_checker


require_admin = require_role(RoleGate.ADMIN)
require_supervisor = require_role(RoleGate.SUPERVISOR)
require_super_admin = require_role(RoleGate.SUPER_ADMIN)


def _authz(db: AsyncSession) -> AuthorizationService:
    return AuthorizationService(PermissionRepository(db))


def _activity(db: AsyncSession) -> ActivityLogService:
    return ActivityLogService(ActivityLogRepository(db))


def _build_session_service(db: AsyncSession, settings: Settings) -> SessionService:
    return SessionService(
        company_repo=CompanyRepository(db),
        user_repo=UserRepository(db),
        authz=_authz(db),
        activity=_activity(db),
        token_ttl_minutes=settings.access_token_expire_minutes,
        secret_key=settings.secret_key,
        algorithm=settings.algorithm,
    )


async def get_session_service(
    db: AsyncSession = Depends(get_db), settings: Settings = Depends(get_app_settings)
) -> SessionService:
    return _build_session_service(db, settings)


async def get_session_service_transactional(
    db: AsyncSession = Depends(get_db_transactional),
    settings: Settings = Depends(get_app_settings),
) -> SessionService:
    """Session service with transaction management (login/logout write activity)"""
    return _build_session_service(db, settings)


def _build_user_service(db: AsyncSession) -> UserService:
    return UserService(UserRepository(db), CompanyRepository(db), _authz(db), _activity(db))


async def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return _build_user_service(db)


async def get_user_service_transactional(
    db: AsyncSession = Depends(get_db_transactional),
) -> UserService:
    return _build_user_service(db)


def _build_permission_service(db: AsyncSession) -> PermissionService:
    return PermissionService(PermissionRepository(db), _authz(db), _activity(db))


async def get_permission_service(db: AsyncSession = Depends(get_db)) -> PermissionService:
    return _build_permission_service(db)


async def get_permission_service_transactional(
    db: AsyncSession = Depends(get_db_transactional),
) -> PermissionService:
    return _build_permission_service(db)


def _build_patrol_service(db: AsyncSession, settings: Settings) -> PatrolService:
    return PatrolService(
        PatrolRepository(db),
        _authz(db),
        _activity(db),
        expected_per_shift=settings.expected_patrols_per_shift,
    )


async def get_patrol_service(
    db: AsyncSession = Depends(get_db), settings: Settings = Depends(get_app_settings)
) -> PatrolService:
    return _build_patrol_service(db, settings)


async def get_patrol_service_transactional(
    db: AsyncSession = Depends(get_db_transactional),
    settings: Settings = Depends(get_app_settings),
) -> PatrolService:
    return _build_patrol_service(db, settings)


def _build_visitor_service(db: AsyncSession) -> VisitorService:
    return VisitorService(VisitorRepository(db), _authz(db), _activity(db))


async def get_visitor_service(db: AsyncSession = Depends(get_db)) -> VisitorService:
    return _build_visitor_service(db)


async def get_visitor_service_transactional(
    db: AsyncSession = Depends(get_db_transactional),
) -> VisitorService:
    return _build_visitor_service(db)


async def get_report_service(db: AsyncSession = Depends(get_db)) -> ReportService:
    return ReportService(
        ActivityLogRepository(db), PatrolRepository(db), VisitorRepository(db), _authz(db)
    )


def _build_location_service(db: AsyncSession) -> LocationService:
    return LocationService(LocationRepository(db), _authz(db), _activity(db))


async def get_location_service(db: AsyncSession = Depends(get_db)) -> LocationService:
    return _build_location_service(db)


async def get_location_service_transactional(
    db: AsyncSession = Depends(get_db_transactional),
) -> LocationService:
    return _build_location_service(db)


def _build_provisioning_service(db: AsyncSession, settings: Settings) -> CompanyProvisioningService:
    return CompanyProvisioningService(
        company_repo=CompanyRepository(db),
        user_repo=UserRepository(db),
        init_service=CompanyInitializationService(PermissionRepository(db), LocationRepository(db)),
        authz=_authz(db),
        platform_company_code=settings.platform_company_code,
        default_expiry_days=settings.default_company_expiry_days,
        default_max_users=settings.default_company_max_users,
        default_plan=settings.default_subscription_plan,
    )


async def get_provisioning_service(
    db: AsyncSession = Depends(get_db), settings: Settings = Depends(get_app_settings)
) -> CompanyProvisioningService:
    return _build_provisioning_service(db, settings)


async def get_provisioning_service_transactional(
    db: AsyncSession = Depends(get_db_transactional),
    settings: Settings = Depends(get_app_settings),
) -> CompanyProvisioningService:
    """Provisioning service with transaction management: creation is all-or-nothing"""
    return _build_provisioning_service(db, settings)
