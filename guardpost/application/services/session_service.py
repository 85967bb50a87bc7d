"""
Session issuing: login, logout and current-user lookup.

Login checks run in a fixed order: company existence, company status and
expiry, credentials, then device restriction. Company checks come first so a
suspended or expired tenant is reported as such regardless of credentials.
"""

from dataclasses import dataclass
from datetime import timedelta

from guardpost.application.services.activity_log_service import ActivityLogService
from guardpost.application.services.authorization_service import AuthorizationService
from guardpost.domain.enums import ActivityEventType, PermissionName, UserRole
from guardpost.domain.exceptions import (
    InvalidCompanyError,
    InvalidCredentialsError,
    MobileLoginRestrictedError,
    ResourceNotFoundException,
)
from guardpost.domain.policies import MOBILE_EXEMPT_ROLES
from guardpost.domain.value_objects import AccessScope
from guardpost.infrastructure.persistence.models.company import Company
from guardpost.infrastructure.persistence.models.user import User
from guardpost.infrastructure.persistence.repositories.company_repo import CompanyRepository
from guardpost.infrastructure.persistence.repositories.user_repo import UserRepository
from guardpost.infrastructure.security.jwt import create_access_token
from guardpost.shared.telemetry.logging import get_logger
from guardpost.shared.telemetry.tracing import traced
from guardpost.shared.utils import utc_now

logger = get_logger(__name__)


@dataclass
class SessionResult:
    """Issued session token with the authenticated user"""

    access_token: str
    expires_in: int
    user: User
    company: Company
    token_type: str = "bearer"


class SessionService:
    def __init__(
        self,
        company_repo: CompanyRepository,
        user_repo: UserRepository,
        authz: AuthorizationService,
        activity: ActivityLogService,
        token_ttl_minutes: int,
        secret_key: str,
        algorithm: str = "HS256",
    ) -> None:
        self.company_repo = company_repo
        self.user_repo = user_repo
        self.authz = authz
        self.activity = activity
        self.token_ttl = timedelta(minutes=token_ttl_minutes)
        self.secret_key = secret_key
        self.algorithm = algorithm

    @traced("session.authenticate")
    async def authenticate(
        self,
        company_code: str,
        username: str,
        password: str,
        *,
        device_is_mobile: bool = False,
    ) -> SessionResult:
        """
        Validate credentials and issue a session token.

        Raises:
            InvalidCompanyError: no company with that code
            CompanySuspendedError / CompanyExpiredError: company may not log in
            InvalidCredentialsError: unknown user, inactive user or wrong password
            MobileLoginRestrictedError: mobile device without mobile access
        """
        company = await self.company_repo.get_by_code(company_code)
        if not company:
            logger.warning("Login attempt for unknown company code: %s", company_code)
            raise InvalidCompanyError()

        company.to_entity().ensure_can_login(utc_now())

        user = await self.user_repo.authenticate(company.id, username, password)
        if not user:
            logger.warning("Failed login attempt for user: %s in company: %s", username, company.id)
            raise InvalidCredentialsError()

        if device_is_mobile and not await self._mobile_login_allowed(user):
            logger.warning("Mobile login refused for user: %s in company: %s", user.id, company.id)
            raise MobileLoginRestrictedError()

        access_token = create_access_token(
            data={
                "sub": user.id,
                "company_id": company.id,
                "username": user.username,
                "full_name": user.full_name,
                "role": user.role,
                "unit_number": user.unit_number,
            },
            secret_key=self.secret_key,
            algorithm=self.algorithm,
            expires_delta=self.token_ttl,
        )

        await self.activity.record(
            company.id,
            ActivityEventType.LOGIN,
            f"{user.full_name} logged in" + (" from a mobile device" if device_is_mobile else ""),
            user_id=user.id,
        )

        logger.info("Successful login for user: %s in company: %s", user.username, company.id)
        return SessionResult(
            access_token=access_token,
            expires_in=int(self.token_ttl.total_seconds()),
            user=user,
            company=company,
        )

    async def _mobile_login_allowed(self, user: User) -> bool:
        role = UserRole(user.role)
        if role in MOBILE_EXEMPT_ROLES:
            return True
        if user.mobile_login_allowed:
            return True
        return await self.authz.has_permission(user.company_id, role, PermissionName.MOBILE_LOGIN)

    async def logout(self, scope: AccessScope) -> None:
        """Record the logout. Tokens are stateless and expire on their own."""
        await self.activity.record(
            scope.company_id,
            ActivityEventType.LOGOUT,
            f"{scope.full_name or scope.username} logged out",
            user_id=scope.user_id,
        )

    async def me(self, scope: AccessScope) -> User:
        user = await self.user_repo.get_in_company(scope.user_id, scope.company_id)
        if not user:
            raise ResourceNotFoundException("User", scope.user_id)
        return user
