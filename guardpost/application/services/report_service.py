"""Activity log listings and summary reports."""

from dataclasses import dataclass, field
from datetime import date

from guardpost.application.pagination import Page, PageRequest
from guardpost.application.services.authorization_service import AuthorizationService
from guardpost.domain.enums import ActivityEventType, SecurityStatus, VisitorStatus
from guardpost.domain.policies import Action
from guardpost.domain.value_objects import AccessScope
from guardpost.infrastructure.persistence.models import ActivityLog, PatrolRound, Visitor
from guardpost.infrastructure.persistence.repositories import (
    ActivityLogRepository,
    PatrolRepository,
    VisitorRepository,
)
from guardpost.shared.utils import day_bounds


@dataclass
class ReportSummary:
    visitors_total: int
    visitors_inside: int
    patrols_total: int
    patrols_by_status: dict[str, int] = field(default_factory=dict)
    activity_total: int = 0


def _time_range(column, from_date: date | None, to_date: date | None) -> list:
    """Inclusive calendar-day range over a timestamp column"""
    criteria = []
    if from_date is not None:
        criteria.append(column >= day_bounds(from_date)[0])
    if to_date is not None:
        criteria.append(column < day_bounds(to_date)[1])
    return criteria


class ReportService:
    def __init__(
        self,
        activity_repo: ActivityLogRepository,
        patrol_repo: PatrolRepository,
        visitor_repo: VisitorRepository,
        authz: AuthorizationService,
    ) -> None:
        self.activity_repo = activity_repo
        self.patrol_repo = patrol_repo
        self.visitor_repo = visitor_repo
        self.authz = authz

    async def list_entries(
        self,
        scope: AccessScope,
        page: PageRequest,
        *,
        from_date: date | None = None,
        to_date: date | None = None,
        event_type: ActivityEventType | None = None,
    ) -> Page[ActivityLog]:
        criteria = _time_range(ActivityLog.event_time, from_date, to_date)
        if event_type is not None:
            criteria.append(ActivityLog.event_type == event_type.value)
        return await self.activity_repo.list_scoped(
            scope, *criteria, page=page, order_by=ActivityLog.event_time
        )

    async def recent(self, scope: AccessScope, limit: int = 10) -> list[ActivityLog]:
        return await self.activity_repo.recent_scoped(
            scope, order_by=ActivityLog.event_time, limit=limit
        )

    async def summary(
        self,
        scope: AccessScope,
        *,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> ReportSummary:
        """Counts over the caller's visible rows; requires view_reports"""
        await self.authz.require(scope, Action.VIEW_REPORT_SUMMARY)

        visitor_range = _time_range(Visitor.entry_time, from_date, to_date)
        patrol_range = _time_range(PatrolRound.patrol_time, from_date, to_date)

        by_status = await self.patrol_repo.count_by_security_status(scope, *patrol_range)
        return ReportSummary(
            visitors_total=await self.visitor_repo.count_scoped(scope, *visitor_range),
            visitors_inside=await self.visitor_repo.count_scoped(
                scope, *visitor_range, Visitor.status == VisitorStatus.INSIDE.value
            ),
            patrols_total=sum(by_status.values()),
            patrols_by_status={
                status.value: by_status.get(status.value, 0) for status in SecurityStatus
            },
            activity_total=await self.activity_repo.count_scoped(
                scope, *_time_range(ActivityLog.event_time, from_date, to_date)
            ),
        )
