"""Writes entries to the append-only activity log."""

from guardpost.domain.enums import ActivityEventType, ActivityStatus
from guardpost.infrastructure.persistence.models.activity_log import ActivityLog
from guardpost.infrastructure.persistence.repositories.activity_log_repo import (
    ActivityLogRepository,
)


class ActivityLogService:
    """
    Records security-relevant actions.

    Entries are written on the caller's session so they commit or roll back
    together with the mutation they describe.
    """

    def __init__(self, activity_repo: ActivityLogRepository) -> None:
        self.activity_repo = activity_repo

    async def record(
        self,
        company_id: str,
        event_type: ActivityEventType,
        description: str,
        *,
        user_id: str | None = None,
        visitor_id: str | None = None,
        patrol_id: str | None = None,
        location: str | None = None,
        status: ActivityStatus = ActivityStatus.SUCCESS,
    ) -> ActivityLog:
        entry = ActivityLog(
            company_id=company_id,
            event_type=event_type.value,
            description=description,
            user_id=user_id,
            visitor_id=visitor_id,
            patrol_id=patrol_id,
            location=location,
            status=status.value,
        )
        return await self.activity_repo.append(entry)
