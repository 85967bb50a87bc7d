from typing import Any, TypeVar

from sqlalchemy import func, select
from sqlalchemy.sql.elements import ColumnElement

from guardpost.application.pagination import Page, PageRequest
from guardpost.domain.value_objects import AccessScope
from guardpost.infrastructure.persistence.database import Base
from guardpost.infrastructure.persistence.repositories.base import BaseRepository
from guardpost.infrastructure.persistence.scoping import (
    company_predicate,
    scope_clause,
    scoped_select,
)

ModelType = TypeVar("ModelType", bound=Base)


class TenantScopedRepository(BaseRepository[ModelType]):
    """
    Repository for company-owned rows.

    Lookups take the caller's company (and, for listings, the full access
    scope) so cross-tenant rows are indistinguishable from missing ones.
    """

    async def get_in_company(self, id: str, company_id: str) -> ModelType | None:
        model: Any = self.model
        result = await self.db.execute(
            select(self.model).where(model.id == id, company_predicate(self.model, company_id))
        )
        return result.scalar_one_or_none()

    async def list_scoped(
        self,
        scope: AccessScope,
        *criteria: ColumnElement[bool],
        page: PageRequest,
        order_by: Any,
    ) -> Page[ModelType]:
        """Paginated rows visible to the caller, newest first by order_by"""
        total = await self.count_scoped(scope, *criteria)
        result = await self.db.execute(
            scoped_select(self.model, scope, *criteria)
            .order_by(order_by.desc())
            .offset(page.offset)
            .limit(page.limit)
        )
        return Page(
            items=list(result.scalars().all()),
            total=total,
            page=page.page,
            limit=page.limit,
        )

    async def recent_scoped(
        self, scope: AccessScope, *criteria: ColumnElement[bool], order_by: Any, limit: int
    ) -> list[ModelType]:
        result = await self.db.execute(
            scoped_select(self.model, scope, *criteria).order_by(order_by.desc()).limit(limit)
        )
        return list(result.scalars().all())

    async def count_scoped(self, scope: AccessScope, *criteria: ColumnElement[bool]) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(self.model)
            .where(scope_clause(self.model, scope), *criteria)
        )
        return int(result.scalar_one())

    async def get_scoped(self, id: str, scope: AccessScope) -> ModelType | None:
        """Single row if visible to the caller (company and, if applicable, owner)"""
        model: Any = self.model
        result = await self.db.execute(scoped_select(self.model, scope, model.id == id))
        return result.scalar_one_or_none()
