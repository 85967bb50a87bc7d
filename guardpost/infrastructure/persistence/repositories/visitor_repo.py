from sqlalchemy.ext.asyncio import AsyncSession

from guardpost.infrastructure.persistence.models import Visitor
from guardpost.infrastructure.persistence.repositories.scoped import TenantScopedRepository


class VisitorRepository(TenantScopedRepository[Visitor]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Visitor)
