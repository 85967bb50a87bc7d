from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from guardpost.infrastructure.persistence.models import (
    ActivityLog,
    Company,
    Location,
    PatrolRound,
    RolePermission,
    User,
    Visitor,
)
from guardpost.infrastructure.persistence.repositories.base import BaseRepository

# Children first so foreign keys are never left dangling
_TENANT_TABLES = (ActivityLog, PatrolRound, Visitor, Location, RolePermission, User)


class CompanyRepository(BaseRepository[Company]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Company)

    async def get_by_code(self, code: str) -> Company | None:
        """Case-insensitive exact match on the company code"""
        result = await self.db.execute(
            select(Company).where(func.upper(Company.code) == code.strip().upper())
        )
        return result.scalar_one_or_none()

    def _with_counts(self):
        user_count = (
            select(func.count(User.id))
            .where(User.company_id == Company.id)
            .correlate(Company)
            .scalar_subquery()
        )
        patrol_count = (
            select(func.count(PatrolRound.id))
            .where(PatrolRound.company_id == Company.id)
            .correlate(Company)
            .scalar_subquery()
        )
        return select(Company, user_count.label("user_count"), patrol_count.label("patrol_count"))

    async def list_with_counts(self) -> list[tuple[Company, int, int]]:
        """All companies with their user and patrol counts, newest first"""
        result = await self.db.execute(self._with_counts().order_by(Company.created_at.desc()))
        return [(row[0], int(row[1]), int(row[2])) for row in result.all()]

    async def get_with_counts(self, company_id: str) -> tuple[Company, int, int] | None:
        result = await self.db.execute(self._with_counts().where(Company.id == company_id))
        row = result.first()
        if row is None:
            return None
        return row[0], int(row[1]), int(row[2])

    async def delete_with_tenant_data(self, company: Company) -> None:
        """Delete a company and every row it owns"""
        for model in _TENANT_TABLES:
            await self.db.execute(
                delete(model)
                .where(model.company_id == company.id)
                .execution_options(synchronize_session=False)
            )
        await self.delete(company)
