"""Viewing and toggling the per-company permission grants."""

from dataclasses import dataclass

from guardpost.application.services.activity_log_service import ActivityLogService
from guardpost.application.services.authorization_service import AuthorizationService
from guardpost.domain.enums import ActivityEventType, PermissionName, UserRole
from guardpost.domain.exceptions import ValidationException
from guardpost.domain.policies import Action
from guardpost.domain.value_objects import AccessScope
from guardpost.infrastructure.persistence.repositories.permission_repo import (
    PermissionRepository,
)
from guardpost.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ToggleResult:
    role: str
    permission: str
    active: bool


class PermissionService:
    def __init__(
        self,
        permission_repo: PermissionRepository,
        authz: AuthorizationService,
        activity: ActivityLogService,
    ) -> None:
        self.permission_repo = permission_repo
        self.authz = authz
        self.activity = activity

    async def list_permissions(self, scope: AccessScope) -> dict[str, list[str]]:
        """Granted permissions of every assignable role in the caller's company"""
        await self.authz.require(scope, Action.VIEW_PERMISSIONS)

        matrix: dict[str, list[str]] = {role.value: [] for role in UserRole.tenant_roles()}
        for grant in await self.permission_repo.list_for_company(scope.company_id):
            matrix.setdefault(grant.role, []).append(grant.permission)
        return matrix

    async def toggle(self, scope: AccessScope, role: str, permission: str) -> ToggleResult:
        """
        Grant the permission if absent, revoke it if present.

        Raises:
            PermissionDeniedError: caller fails the admin gate or lacks manage_permissions
            ValidationException: unknown or non-assignable role, unknown permission
        """
        await self.authz.require(scope, Action.TOGGLE_PERMISSION)

        if role not in UserRole.values():
            raise ValidationException(f"Unknown role: {role}", field="role")
        if role == UserRole.SUPER_ADMIN.value:
            raise ValidationException("super_admin permissions cannot be changed", field="role")
        if permission not in PermissionName.values():
            raise ValidationException(f"Unknown permission: {permission}", field="permission")

        grant = await self.permission_repo.get_grant(scope.company_id, role, permission)
        if grant:
            await self.permission_repo.delete(grant)
            active = False
        else:
            await self.permission_repo.grant(scope.company_id, role, permission)
            active = True

        await self.activity.record(
            scope.company_id,
            ActivityEventType.PERMISSION_CHANGED,
            f"Permission {permission} {'granted to' if active else 'revoked from'} {role}",
            user_id=scope.user_id,
        )
        logger.info(
            "Permission toggled in company %s: %s/%s active=%s",
            scope.company_id,
            role,
            permission,
            active,
        )
        return ToggleResult(role=role, permission=permission, active=active)
