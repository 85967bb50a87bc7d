from sqlalchemy.ext.asyncio import AsyncSession

from guardpost.infrastructure.persistence.models import ActivityLog
from guardpost.infrastructure.persistence.repositories.scoped import TenantScopedRepository


class ActivityLogRepository(TenantScopedRepository[ActivityLog]):
    """Append-only repository: entries can be written and read, never changed"""

    def __init__(self, db: AsyncSession):
        super().__init__(db, ActivityLog)

    async def append(self, entry: ActivityLog) -> ActivityLog:
        self.db.add(entry)
        await self.db.flush()
        return entry

    async def update(self, obj: ActivityLog) -> ActivityLog:
        raise TypeError("Activity log entries are append-only")

    async def delete(self, obj: ActivityLog) -> None:
        raise TypeError("Activity log entries are append-only")
