from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from guardpost.domain.value_objects import AccessScope
from guardpost.infrastructure.persistence.models import PatrolRound
from guardpost.infrastructure.persistence.repositories.scoped import TenantScopedRepository
from guardpost.infrastructure.persistence.scoping import scope_clause


class PatrolRepository(TenantScopedRepository[PatrolRound]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, PatrolRound)

    async def count_by_security_status(
        self, scope: AccessScope, *criteria: ColumnElement[bool]
    ) -> dict[str, int]:
        """Visible patrols grouped by security status"""
        result = await self.db.execute(
            select(PatrolRound.security_status, func.count(PatrolRound.id))
            .where(scope_clause(PatrolRound, scope), *criteria)
            .group_by(PatrolRound.security_status)
        )
        return {status: int(count) for status, count in result.all()}
