import asyncio

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from guardpost.application.pagination import Page, PageRequest
from guardpost.infrastructure.persistence.models import ActivityLog, PatrolRound, User, Visitor
from guardpost.infrastructure.persistence.repositories.scoped import TenantScopedRepository
from guardpost.infrastructure.security.password import (
    dummy_password_hash,
    get_password_hash,
    verify_password,
)


class UserRepository(TenantScopedRepository[User]):
    """Repository for company users"""

    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def get_by_username(self, company_id: str, username: str) -> User | None:
        """Get user by username within a company, case-insensitively"""
        result = await self.db.execute(
            select(User).where(
                User.company_id == company_id,
                func.lower(User.username) == username.strip().lower(),
            )
        )
        return result.scalar_one_or_none()

    async def authenticate(self, company_id: str, username: str, password: str) -> User | None:
        """
        Authenticate user by company, username and password.

        Returns User if credentials are valid and the account is active,
        None otherwise.
        """
        user = await self.get_by_username(company_id, username)

        if not user:
            # Perform dummy hash check to prevent timing attacks
            await asyncio.to_thread(verify_password, password, dummy_password_hash())
            return None

        if not await asyncio.to_thread(verify_password, password, user.hashed_password):
            return None

        if not user.is_active:
            return None

        return user

    async def create_user(
        self,
        company_id: str,
        username: str,
        password: str,
        full_name: str,
        role: str,
        email: str | None = None,
        unit_number: str | None = None,
        *,
        mobile_login_allowed: bool = False,
    ) -> User:
        """Create a new user with hashed password"""
        hashed = await asyncio.to_thread(get_password_hash, password)
        user = User(
            company_id=company_id,
            username=username.strip(),
            hashed_password=hashed,
            full_name=full_name,
            role=role,
            email=email,
            unit_number=unit_number,
            is_active=True,
            mobile_login_allowed=mobile_login_allowed,
        )
        return await self.create(user)

    async def set_password(self, user: User, new_password: str) -> None:
        user.hashed_password = await asyncio.to_thread(get_password_hash, new_password)

    async def count_in_company(self, company_id: str) -> int:
        result = await self.db.execute(
            select(func.count(User.id)).where(User.company_id == company_id)
        )
        return int(result.scalar_one())

    async def list_with_patrol_counts(
        self, company_id: str, page: PageRequest
    ) -> Page[tuple[User, int]]:
        """Users of a company with the number of patrols each has logged"""
        patrol_count = (
            select(func.count(PatrolRound.id))
            .where(PatrolRound.guard_id == User.id)
            .correlate(User)
            .scalar_subquery()
        )
        total = await self.count_in_company(company_id)
        result = await self.db.execute(
            select(User, patrol_count.label("patrol_count"))
            .where(User.company_id == company_id)
            .order_by(User.created_at.desc(), User.username)
            .offset(page.offset)
            .limit(page.limit)
        )
        return Page(
            items=[(row[0], int(row[1])) for row in result.all()],
            total=total,
            page=page.page,
            limit=page.limit,
        )

    async def delete_with_dependents(self, user: User) -> None:
        """
        Hard-delete a user.

        Visitors and activity entries keep their rows with the user reference
        nulled; the user's patrol rounds are removed.
        """
        patrol_ids = select(PatrolRound.id).where(PatrolRound.guard_id == user.id)

        await self.db.execute(
            update(Visitor)
            .where(Visitor.registered_by == user.id)
            .values(registered_by=None)
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(
            update(ActivityLog)
            .where(ActivityLog.user_id == user.id)
            .values(user_id=None)
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(
            update(ActivityLog)
            .where(ActivityLog.patrol_id.in_(patrol_ids))
            .values(patrol_id=None)
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(
            delete(PatrolRound)
            .where(PatrolRound.guard_id == user.id)
            .execution_options(synchronize_session=False)
        )
        await self.delete(user)
