"""Patrol rounds logged by guards."""

from dataclasses import dataclass
from datetime import date
from typing import Any

from guardpost.application.pagination import Page, PageRequest
from guardpost.application.services.activity_log_service import ActivityLogService
from guardpost.application.services.authorization_service import AuthorizationService
from guardpost.domain.enums import (
    ActivityEventType,
    ActivityStatus,
    ResolutionStatus,
    SecurityStatus,
)
from guardpost.domain.exceptions import PermissionDeniedError, ResourceNotFoundException
from guardpost.domain.policies import Action
from guardpost.domain.value_objects import AccessScope
from guardpost.infrastructure.persistence.models.patrol import PatrolRound
from guardpost.infrastructure.persistence.repositories.patrol_repo import PatrolRepository
from guardpost.shared.utils import day_bounds, utc_now

UPDATABLE_PATROL_FIELDS = ("location", "security_status", "notes")


@dataclass
class ShiftStatus:
    """Today's patrol progress for the caller's visible rows"""

    completed: int
    expected: int
    normal: int
    observation: int
    danger: int

    @property
    def remaining(self) -> int:
        return max(self.expected - self.completed, 0)


class PatrolService:
    def __init__(
        self,
        patrol_repo: PatrolRepository,
        authz: AuthorizationService,
        activity: ActivityLogService,
        expected_per_shift: int = 6,
    ) -> None:
        self.patrol_repo = patrol_repo
        self.authz = authz
        self.activity = activity
        self.expected_per_shift = expected_per_shift

    async def list_patrols(
        self,
        scope: AccessScope,
        page: PageRequest,
        *,
        day: date | None = None,
        security_status: SecurityStatus | None = None,
        guard_id: str | None = None,
    ) -> Page[PatrolRound]:
        criteria = []
        if day is not None:
            start, end = day_bounds(day)
            criteria += [PatrolRound.patrol_time >= start, PatrolRound.patrol_time < end]
        if security_status is not None:
            criteria.append(PatrolRound.security_status == security_status.value)
        if guard_id is not None:
            criteria.append(PatrolRound.guard_id == guard_id)
        return await self.patrol_repo.list_scoped(
            scope, *criteria, page=page, order_by=PatrolRound.patrol_time
        )

    async def list_for_guard(
        self, scope: AccessScope, guard_id: str, page: PageRequest
    ) -> Page[PatrolRound]:
        """Patrols of one guard. Non-privileged callers may only ask for themselves."""
        if guard_id != scope.user_id and not scope.sees_all_rows:
            raise PermissionDeniedError("You can only view your own patrols")
        return await self.list_patrols(scope, page, guard_id=guard_id)

    async def recent(self, scope: AccessScope, limit: int = 5) -> list[PatrolRound]:
        return await self.patrol_repo.recent_scoped(
            scope, order_by=PatrolRound.patrol_time, limit=limit
        )

    async def get_patrol(self, scope: AccessScope, patrol_id: str) -> PatrolRound:
        patrol = await self.patrol_repo.get_scoped(patrol_id, scope)
        if not patrol:
            raise ResourceNotFoundException("Patrol", patrol_id)
        return patrol

    async def log_patrol(
        self,
        scope: AccessScope,
        *,
        location: str,
        security_status: SecurityStatus,
        notes: str | None = None,
        attachments: list[str] | None = None,
    ) -> PatrolRound:
        """Create a patrol owned by the caller and record it in the activity log"""
        await self.authz.require(scope, Action.LOG_PATROL)

        patrol = await self.patrol_repo.create(
            PatrolRound(
                company_id=scope.company_id,
                guard_id=scope.user_id,
                location=location,
                security_status=security_status.value,
                notes=notes,
                attachments=list(attachments or []),
                patrol_time=utc_now(),
                resolution_status=ResolutionStatus.PENDING.value,
            )
        )

        await self.activity.record(
            scope.company_id,
            ActivityEventType.PATROL,
            f"Patrol at {location}: {security_status.value}",
            user_id=scope.user_id,
            patrol_id=patrol.id,
            location=location,
            status=(
                ActivityStatus.COMPLETED
                if security_status is SecurityStatus.NORMAL
                else ActivityStatus.REVIEW
            ),
        )
        return patrol

    async def update_patrol(
        self, scope: AccessScope, patrol_id: str, changes: dict[str, Any]
    ) -> PatrolRound:
        """Owner or privileged caller may edit location, status and notes"""
        await self.authz.require(scope, Action.UPDATE_PATROL)
        patrol = await self._get_for_mutation(scope, patrol_id)

        for field in UPDATABLE_PATROL_FIELDS:
            if field in changes and changes[field] is not None:
                value = changes[field]
                setattr(patrol, field, value.value if isinstance(value, SecurityStatus) else value)
        return await self.patrol_repo.update(patrol)

    async def set_resolution(
        self, scope: AccessScope, patrol_id: str, resolution_status: ResolutionStatus
    ) -> PatrolRound:
        await self.authz.require(scope, Action.RESOLVE_PATROL)
        patrol = await self._get_for_mutation(scope, patrol_id)
        patrol.resolution_status = resolution_status.value
        return await self.patrol_repo.update(patrol)

    async def shift_status(self, scope: AccessScope) -> ShiftStatus:
        start, end = day_bounds(utc_now().date())
        counts = await self.patrol_repo.count_by_security_status(
            scope, PatrolRound.patrol_time >= start, PatrolRound.patrol_time < end
        )
        return ShiftStatus(
            completed=sum(counts.values()),
            expected=self.expected_per_shift,
            normal=counts.get(SecurityStatus.NORMAL.value, 0),
            observation=counts.get(SecurityStatus.OBSERVATION.value, 0),
            danger=counts.get(SecurityStatus.DANGER.value, 0),
        )

    async def _get_for_mutation(self, scope: AccessScope, patrol_id: str) -> PatrolRound:
        patrol = await self.patrol_repo.get_in_company(patrol_id, scope.company_id)
        if not patrol:
            raise ResourceNotFoundException("Patrol", patrol_id)
        if not scope.can_mutate(patrol.guard_id):
            raise PermissionDeniedError("You can only modify your own patrols")
        return patrol
