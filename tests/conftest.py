"""Shared test fixtures for pytest"""
import os
import tempfile
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path

# Settings are read from the environment at import time of main
_TMP_DIR = Path(tempfile.mkdtemp(prefix="guardpost-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP_DIR / 'app.db'}"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production-use-0123456789"
os.environ["TELEMETRY_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "test"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from guardpost.application.services.company_initialization_service import (  # noqa: E402
    CompanyInitializationService,
)
from guardpost.domain.enums import CompanyStatus, UserRole  # noqa: E402
from guardpost.domain.value_objects import AccessScope  # noqa: E402
from guardpost.infrastructure.config.settings import get_settings  # noqa: E402
from guardpost.infrastructure.persistence.database import Database  # noqa: E402
from guardpost.infrastructure.persistence.models import Company, User  # noqa: E402
from guardpost.infrastructure.persistence.repositories import (  # noqa: E402
    CompanyRepository,
    LocationRepository,
    PermissionRepository,
    UserRepository,
)
from guardpost.infrastructure.security.jwt import create_access_token  # noqa: E402
from guardpost.shared.utils import utc_now  # noqa: E402
from main import create_app  # noqa: E402

PASSWORD = "password123"


@dataclass
class Tenant:
    """A seeded company with its users keyed by username"""

    company: Company
    users: dict[str, User] = field(default_factory=dict)


@dataclass
class World:
    platform: Tenant
    acme: Tenant
    other: Tenant


def scope_for(user: User) -> AccessScope:
    """Access scope as the session token of this user would produce it"""
    return AccessScope(
        user_id=user.id,
        company_id=user.company_id,
        role=UserRole(user.role),
        username=user.username,
        full_name=user.full_name,
        unit_number=user.unit_number,
    )


def auth_headers(user: User) -> dict[str, str]:
    token = create_access_token(
        data={
            "sub": user.id,
            "company_id": user.company_id,
            "username": user.username,
            "full_name": user.full_name,
            "role": user.role,
            "unit_number": user.unit_number,
        },
        secret_key=get_settings().secret_key,
    )
    return {"Authorization": f"Bearer {token}"}


async def create_company(
    session,
    code: str,
    name: str,
    *,
    status: CompanyStatus = CompanyStatus.ACTIVE,
    expiry_days: int | None = 30,
    initialize: bool = True,
    max_users: int = 10,
) -> Company:
    company = await CompanyRepository(session).create(
        Company(
            name=name,
            code=code,
            subscription_plan="basic",
            max_users=max_users,
            expiry_date=utc_now() + timedelta(days=expiry_days) if expiry_days is not None else None,
            status=status.value,
        )
    )
    if initialize:
        await CompanyInitializationService(
            PermissionRepository(session), LocationRepository(session)
        ).initialize_company(company.id)
    return company


async def create_user(session, company: Company, username: str, role: UserRole, **kwargs) -> User:
    return await UserRepository(session).create_user(
        company_id=company.id,
        username=username,
        password=PASSWORD,
        full_name=username.replace("_", " ").title(),
        role=role.value,
        **kwargs,
    )


@pytest.fixture
async def database(tmp_path):
    """Fresh SQLite database per test"""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'guardpost.db'}")
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
async def session(database):
    """Session committed by the caller; used by service and repository tests"""
    async with database.session() as s:
        yield s


@pytest.fixture
async def world(database) -> World:
    """
    Platform company with a super admin, plus two tenant companies.

    ACME: acme_admin, acme_super, acme_guard, acme_guard2
    OTHER: other_admin, other_guard
    """
    async with database.transaction() as s:
        platform = Tenant(
            await create_company(s, "PLATFORM", "Platform", expiry_days=None, initialize=False)
        )
        platform.users["root"] = await create_user(s, platform.company, "root", UserRole.SUPER_ADMIN)

        acme = Tenant(await create_company(s, "ACME", "Acme Industries"))
        acme.users["acme_admin"] = await create_user(s, acme.company, "acme_admin", UserRole.ADMIN)
        acme.users["acme_super"] = await create_user(
            s, acme.company, "acme_super", UserRole.SUPERVISOR
        )
        acme.users["acme_guard"] = await create_user(s, acme.company, "acme_guard", UserRole.GUARD)
        acme.users["acme_guard2"] = await create_user(
            s, acme.company, "acme_guard2", UserRole.GUARD
        )

        other = Tenant(await create_company(s, "OTHER", "Other Corp"))
        other.users["other_admin"] = await create_user(s, other.company, "other_admin", UserRole.ADMIN)
        other.users["other_guard"] = await create_user(s, other.company, "other_guard", UserRole.GUARD)

    return World(platform=platform, acme=acme, other=other)


@pytest.fixture
def app(database):
    return create_app(get_settings(), database)


@pytest.fixture
async def client(app):
    """HTTP client for API testing"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def headers(world):
    """Authorization headers for any seeded user, by username"""
    users = {
        **world.platform.users,
        **world.acme.users,
        **world.other.users,
    }
    return {username: auth_headers(user) for username, user in users.items()}
