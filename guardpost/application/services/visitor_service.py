"""Visitor entry and exit registration."""

from dataclasses import dataclass
from datetime import date, timedelta

from sqlalchemy import or_

from guardpost.application.pagination import Page, PageRequest
from guardpost.application.services.activity_log_service import ActivityLogService
from guardpost.application.services.authorization_service import AuthorizationService
from guardpost.domain.enums import ActivityEventType, VisitorStatus
from guardpost.domain.exceptions import (
    PermissionDeniedError,
    ResourceNotFoundException,
    ValidationException,
)
from guardpost.domain.policies import Action
from guardpost.domain.value_objects import AccessScope
from guardpost.infrastructure.persistence.models.visitor import Visitor
from guardpost.infrastructure.persistence.repositories.visitor_repo import VisitorRepository
from guardpost.shared.utils import day_bounds, utc_now


def contains_pattern(text: str) -> str:
    """LIKE pattern matching text anywhere, with its own wildcards taken literally"""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


@dataclass
class VisitorStats:
    today_total: int
    inside: int
    left: int
    yesterday_total: int

    @property
    def change_percent(self) -> float:
        """Today's visitor count relative to yesterday's"""
        if self.yesterday_total == 0:
            return 100.0 if self.today_total else 0.0
        return round((self.today_total - self.yesterday_total) / self.yesterday_total * 100, 1)


class VisitorService:
    def __init__(
        self,
        visitor_repo: VisitorRepository,
        authz: AuthorizationService,
        activity: ActivityLogService,
    ) -> None:
        self.visitor_repo = visitor_repo
        self.authz = authz
        self.activity = activity

    async def list_visitors(
        self,
        scope: AccessScope,
        page: PageRequest,
        *,
        day: date | None = None,
        status: VisitorStatus | None = None,
        search: str | None = None,
    ) -> Page[Visitor]:
        criteria = []
        if day is not None:
            start, end = day_bounds(day)
            criteria += [Visitor.entry_time >= start, Visitor.entry_time < end]
        if status is not None:
            criteria.append(Visitor.status == status.value)
        if search:
            pattern = contains_pattern(search.strip())
            criteria.append(
                or_(
                    Visitor.full_name.ilike(pattern, escape="\\"),
                    Visitor.id_number.ilike(pattern, escape="\\"),
                    Visitor.visitor_company.ilike(pattern, escape="\\"),
                )
            )
        return await self.visitor_repo.list_scoped(
            scope, *criteria, page=page, order_by=Visitor.entry_time
        )

    async def today(self, scope: AccessScope, page: PageRequest) -> Page[Visitor]:
        return await self.list_visitors(scope, page, day=utc_now().date())

    async def stats(self, scope: AccessScope) -> VisitorStats:
        today = utc_now().date()
        start, end = day_bounds(today)
        y_start, y_end = day_bounds(today - timedelta(days=1))

        today_criteria = (Visitor.entry_time >= start, Visitor.entry_time < end)
        return VisitorStats(
            today_total=await self.visitor_repo.count_scoped(scope, *today_criteria),
            inside=await self.visitor_repo.count_scoped(
                scope, *today_criteria, Visitor.status == VisitorStatus.INSIDE.value
            ),
            left=await self.visitor_repo.count_scoped(
                scope, *today_criteria, Visitor.status == VisitorStatus.LEFT.value
            ),
            yesterday_total=await self.visitor_repo.count_scoped(
                scope, Visitor.entry_time >= y_start, Visitor.entry_time < y_end
            ),
        )

    async def get_visitor(self, scope: AccessScope, visitor_id: str) -> Visitor:
        visitor = await self.visitor_repo.get_scoped(visitor_id, scope)
        if not visitor:
            raise ResourceNotFoundException("Visitor", visitor_id)
        return visitor

    async def register_entry(
        self,
        scope: AccessScope,
        *,
        full_name: str,
        id_number: str,
        phone: str | None = None,
        visitor_company: str | None = None,
        host_name: str | None = None,
        visit_reason: str | None = None,
        gate_number: str = "1",
        notes: str | None = None,
    ) -> Visitor:
        await self.authz.require(scope, Action.REGISTER_VISITOR)

        visitor = await self.visitor_repo.create(
            Visitor(
                company_id=scope.company_id,
                registered_by=scope.user_id,
                full_name=full_name,
                id_number=id_number,
                phone=phone,
                visitor_company=visitor_company,
                host_name=host_name,
                visit_reason=visit_reason,
                gate_number=gate_number,
                notes=notes,
                entry_time=utc_now(),
                status=VisitorStatus.INSIDE.value,
            )
        )
        await self.activity.record(
            scope.company_id,
            ActivityEventType.VISITOR_ENTRY,
            f"Visitor {full_name} entered at gate {gate_number}",
            user_id=scope.user_id,
            visitor_id=visitor.id,
        )
        return visitor

    async def checkout(self, scope: AccessScope, visitor_id: str) -> Visitor:
        """
        Record a visitor's exit.

        Raises:
            ResourceNotFoundException: not in the caller's company
            PermissionDeniedError: non-privileged caller did not register the visitor
            ValidationException: visitor already checked out
        """
        await self.authz.require(scope, Action.CHECKOUT_VISITOR)

        visitor = await self.visitor_repo.get_in_company(visitor_id, scope.company_id)
        if not visitor:
            raise ResourceNotFoundException("Visitor", visitor_id)
        if not scope.can_mutate(visitor.registered_by):
            raise PermissionDeniedError("You can only check out visitors you registered")
        if visitor.status == VisitorStatus.LEFT.value:
            raise ValidationException("Visitor has already checked out")

        visitor.exit_time = utc_now()
        visitor.status = VisitorStatus.LEFT.value
        visitor = await self.visitor_repo.update(visitor)

        await self.activity.record(
            scope.company_id,
            ActivityEventType.VISITOR_EXIT,
            f"Visitor {visitor.full_name} left",
            user_id=scope.user_id,
            visitor_id=visitor.id,
        )
        return visitor
