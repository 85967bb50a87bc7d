from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from guardpost.infrastructure.persistence.models import RolePermission
from guardpost.infrastructure.persistence.repositories.base import BaseRepository


class PermissionRepository(BaseRepository[RolePermission]):
    """Per-company (role, permission) grants"""

    def __init__(self, db: AsyncSession):
        super().__init__(db, RolePermission)

    async def get_grant(self, company_id: str, role: str, permission: str) -> RolePermission | None:
        result = await self.db.execute(
            select(RolePermission).where(
                RolePermission.company_id == company_id,
                RolePermission.role == role,
                RolePermission.permission == permission,
            )
        )
        return result.scalar_one_or_none()

    async def has_grant(self, company_id: str, role: str, permission: str) -> bool:
        result = await self.db.execute(
            select(RolePermission.id)
            .where(
                RolePermission.company_id == company_id,
                RolePermission.role == role,
                RolePermission.permission == permission,
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def list_for_company(self, company_id: str) -> list[RolePermission]:
        result = await self.db.execute(
            select(RolePermission)
            .where(RolePermission.company_id == company_id)
            .order_by(RolePermission.role, RolePermission.permission)
        )
        return list(result.scalars().all())

    async def grant(self, company_id: str, role: str, permission: str) -> RolePermission:
        return await self.create(
            RolePermission(company_id=company_id, role=role, permission=permission)
        )

    async def grant_many(self, company_id: str, grants: Iterable[tuple[str, str]]) -> int:
        """Insert (role, permission) grants in one flush, returns count"""
        rows = [
            RolePermission(company_id=company_id, role=role, permission=permission)
            for role, permission in grants
        ]
        self.db.add_all(rows)
        await self.db.flush()
        return len(rows)
