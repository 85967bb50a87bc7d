from collections.abc import Iterable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from guardpost.infrastructure.persistence.models import Location
from guardpost.infrastructure.persistence.repositories.scoped import TenantScopedRepository


class LocationRepository(TenantScopedRepository[Location]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Location)

    async def list_for_company(
        self, company_id: str, *, include_inactive: bool = False
    ) -> list[Location]:
        stmt = select(Location).where(Location.company_id == company_id)
        if not include_inactive:
            stmt = stmt.where(Location.is_active.is_(True))
        result = await self.db.execute(stmt.order_by(Location.name))
        return list(result.scalars().all())

    async def get_by_code(self, company_id: str, code: str) -> Location | None:
        result = await self.db.execute(
            select(Location).where(
                Location.company_id == company_id,
                func.upper(Location.code) == code.strip().upper(),
            )
        )
        return result.scalar_one_or_none()

    async def add_many(
        self, company_id: str, locations: Iterable[tuple[str, str, str]]
    ) -> int:
        """Insert (code, name, description) rows in one flush, returns count"""
        rows = [
            Location(company_id=company_id, code=code, name=name, description=description)
            for code, name, description in locations
        ]
        self.db.add_all(rows)
        await self.db.flush()
        return len(rows)
