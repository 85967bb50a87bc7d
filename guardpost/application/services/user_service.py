"""Company-scoped user management."""

from typing import Any

from guardpost.application.pagination import Page, PageRequest
from guardpost.application.services.activity_log_service import ActivityLogService
from guardpost.application.services.authorization_service import AuthorizationService
from guardpost.domain.enums import ActivityEventType, UserRole
from guardpost.domain.exceptions import ResourceNotFoundException, ValidationException
from guardpost.domain.policies import Action
from guardpost.domain.value_objects import AccessScope
from guardpost.infrastructure.persistence.models.user import User
from guardpost.infrastructure.persistence.repositories.company_repo import CompanyRepository
from guardpost.infrastructure.persistence.repositories.user_repo import UserRepository
from guardpost.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

UPDATABLE_USER_FIELDS = (
    "full_name",
    "email",
    "role",
    "unit_number",
    "is_active",
    "mobile_login_allowed",
)


class UserService:
    def __init__(
        self,
        user_repo: UserRepository,
        company_repo: CompanyRepository,
        authz: AuthorizationService,
        activity: ActivityLogService,
    ) -> None:
        self.user_repo = user_repo
        self.company_repo = company_repo
        self.authz = authz
        self.activity = activity

    async def list_users(self, scope: AccessScope, page: PageRequest) -> Page[tuple[User, int]]:
        """Users of the caller's company with their patrol counts"""
        await self.authz.require(scope, Action.LIST_USERS)
        return await self.user_repo.list_with_patrol_counts(scope.company_id, page)

    async def get_user(self, scope: AccessScope, user_id: str) -> User:
        """Anyone may read their own record; other records need the supervisor gate"""
        if user_id != scope.user_id:
            await self.authz.require(scope, Action.LIST_USERS)

        user = await self.user_repo.get_in_company(user_id, scope.company_id)
        if not user:
            raise ResourceNotFoundException("User", user_id)
        return user

    async def create_user(
        self,
        scope: AccessScope,
        *,
        username: str,
        password: str,
        full_name: str,
        role: str,
        email: str | None = None,
        unit_number: str | None = None,
        mobile_login_allowed: bool = False,
    ) -> User:
        """
        Create a user in the caller's company.

        Raises:
            ValidationException: super_admin role, duplicate username or user quota reached
        """
        await self.authz.require(scope, Action.CREATE_USER)
        self._validate_role(role)

        if await self.user_repo.get_by_username(scope.company_id, username):
            raise ValidationException("Username already exists", field="username")

        company = await self.company_repo.get_by_id(scope.company_id)
        if not company:
            raise ResourceNotFoundException("Company", scope.company_id)
        if await self.user_repo.count_in_company(scope.company_id) >= company.max_users:
            raise ValidationException(
                f"User limit reached for this company ({company.max_users})"
            )

        user = await self.user_repo.create_user(
            company_id=scope.company_id,
            username=username,
            password=password,
            full_name=full_name,
            role=role,
            email=email,
            unit_number=unit_number,
            mobile_login_allowed=mobile_login_allowed,
        )
        await self.activity.record(
            scope.company_id,
            ActivityEventType.USER_CREATED,
            f"User {user.username} created with role {user.role}",
            user_id=scope.user_id,
        )
        return user

    async def update_user(self, scope: AccessScope, user_id: str, changes: dict[str, Any]) -> User:
        await self.authz.require(scope, Action.UPDATE_USER)

        user = await self.user_repo.get_in_company(user_id, scope.company_id)
        if not user:
            raise ResourceNotFoundException("User", user_id)

        if changes.get("role") is not None:
            self._validate_role(changes["role"])
        if changes.get("password"):
            await self.user_repo.set_password(user, changes["password"])

        for field in UPDATABLE_USER_FIELDS:
            if field in changes and changes[field] is not None:
                setattr(user, field, changes[field])

        updated = await self.user_repo.update(user)
        await self.activity.record(
            scope.company_id,
            ActivityEventType.USER_UPDATED,
            f"User {updated.username} updated",
            user_id=scope.user_id,
        )
        return updated

    async def delete_user(self, scope: AccessScope, user_id: str) -> None:
        """
        Hard-delete a user of the caller's company.

        Raises:
            ValidationException: caller tries to delete themselves
            ResourceNotFoundException: no such user in the caller's company
        """
        await self.authz.require(scope, Action.DELETE_USER)

        if user_id == scope.user_id:
            raise ValidationException("You cannot delete your own account")

        user = await self.user_repo.get_in_company(user_id, scope.company_id)
        if not user:
            raise ResourceNotFoundException("User", user_id)

        username = user.username
        await self.user_repo.delete_with_dependents(user)
        await self.activity.record(
            scope.company_id,
            ActivityEventType.USER_DELETED,
            f"User {username} deleted",
            user_id=scope.user_id,
        )
        logger.info("User %s deleted from company %s by %s", user_id, scope.company_id, scope.user_id)

    @staticmethod
    def _validate_role(role: str) -> None:
        if role not in UserRole.values():
            raise ValidationException(f"Unknown role: {role}", field="role")
        if role == UserRole.SUPER_ADMIN.value:
            raise ValidationException("super_admin cannot be assigned", field="role")
