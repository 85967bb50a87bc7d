"""
Authorization service: the single policy decision point.

A decision combines the action's coarse role gate with a live lookup of the
(company, role, permission) grant table. Nothing is cached; every request
sees the current grants.
"""

from guardpost.domain.enums import PermissionName, UserRole
from guardpost.domain.exceptions import PermissionDeniedError
from guardpost.domain.policies import ACTION_RULES, GATE_MESSAGES, Action, passes_gate
from guardpost.domain.value_objects import AccessScope
from guardpost.infrastructure.persistence.repositories.permission_repo import (
    PermissionRepository,
)
from guardpost.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class AuthorizationService:
    def __init__(self, permission_repo: PermissionRepository) -> None:
        self.permission_repo = permission_repo

    async def has_permission(
        self, company_id: str, role: UserRole | str, permission: PermissionName
    ) -> bool:
        """True if the role holds the permission in the company. super_admin always does."""
        role = UserRole(role)
        if role is UserRole.SUPER_ADMIN:
            return True
        return await self.permission_repo.has_grant(company_id, role.value, permission.value)

    async def is_allowed(self, role: UserRole | str, company_id: str, action: Action) -> bool:
        """Policy decision for (role, company, action)"""
        role = UserRole(role)
        rule = ACTION_RULES[action]
        if not passes_gate(role, rule.gate):
            return False
        if rule.permission is None:
            return True
        return await self.has_permission(company_id, role, rule.permission)

    async def require(self, scope: AccessScope, action: Action) -> None:
        """
        Enforce the policy for the caller.

        Raises:
            PermissionDeniedError: gate or grant check failed
        """
        rule = ACTION_RULES[action]

        if not passes_gate(scope.role, rule.gate):
            logger.warning(
                "Role gate denied: user=%s role=%s action=%s",
                scope.user_id,
                scope.role.value,
                action.value,
            )
            raise PermissionDeniedError(GATE_MESSAGES[rule.gate], action=action.value)

        if rule.permission is not None and not await self.has_permission(
            scope.company_id, scope.role, rule.permission
        ):
            logger.warning(
                "Permission denied: user=%s role=%s permission=%s",
                scope.user_id,
                scope.role.value,
                rule.permission.value,
            )
            raise PermissionDeniedError(
                f"Permission denied: {rule.permission.value} required",
                action=action.value,
                permission=rule.permission.value,
            )
