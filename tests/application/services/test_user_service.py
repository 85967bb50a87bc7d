"""Tests for company-scoped user management"""

import pytest

from conftest import scope_for
from guardpost.application.pagination import PageRequest
from guardpost.application.services.activity_log_service import ActivityLogService
from guardpost.application.services.authorization_service import AuthorizationService
from guardpost.application.services.user_service import UserService
from guardpost.domain.exceptions import (
    PermissionDeniedError,
    ResourceNotFoundException,
    ValidationException,
)
from guardpost.infrastructure.persistence.repositories import (
    ActivityLogRepository,
    CompanyRepository,
    PermissionRepository,
    UserRepository,
)


@pytest.fixture
def user_service(session):
    return UserService(
        UserRepository(session),
        CompanyRepository(session),
        AuthorizationService(PermissionRepository(session)),
        ActivityLogService(ActivityLogRepository(session)),
    )


def new_user(**overrides):
    return {
        "username": "new_guard",
        "password": "guard-pass-1",
        "full_name": "New Guard",
        "role": "guard",
        **overrides,
    }


@pytest.mark.asyncio
async def test_create_user_in_callers_company(user_service, world):
    admin = scope_for(world.acme.users["acme_admin"])

    user = await user_service.create_user(admin, **new_user())

    assert user.company_id == world.acme.company.id
    assert user.hashed_password != "guard-pass-1"


@pytest.mark.asyncio
async def test_username_unique_per_company_only(user_service, world):
    """
    GIVEN acme_guard exists in ACME
    WHEN OTHER creates a user with the same name
    THEN it succeeds, while ACME gets a validation error (case-insensitively)
    """
    await user_service.create_user(
        scope_for(world.other.users["other_admin"]), **new_user(username="acme_guard")
    )

    with pytest.raises(ValidationException):
        await user_service.create_user(
            scope_for(world.acme.users["acme_admin"]), **new_user(username="ACME_GUARD")
        )


@pytest.mark.asyncio
async def test_super_admin_role_cannot_be_assigned(user_service, world):
    with pytest.raises(ValidationException):
        await user_service.create_user(
            scope_for(world.acme.users["acme_admin"]), **new_user(role="super_admin")
        )


@pytest.mark.asyncio
async def test_user_quota_enforced(user_service, session, world):
    company_repo = CompanyRepository(session)
    company = await company_repo.get_by_id(world.acme.company.id)
    company.max_users = 4
    await company_repo.update(company)

    with pytest.raises(ValidationException, match="User limit reached"):
        await user_service.create_user(scope_for(world.acme.users["acme_admin"]), **new_user())


@pytest.mark.asyncio
async def test_supervisor_lists_but_cannot_create(user_service, world):
    supervisor = scope_for(world.acme.users["acme_super"])

    page = await user_service.list_users(supervisor, PageRequest(page=1, limit=10))

    assert page.total == 4
    with pytest.raises(PermissionDeniedError):
        await user_service.create_user(supervisor, **new_user())


@pytest.mark.asyncio
async def test_guard_reads_only_own_record(user_service, world):
    guard = scope_for(world.acme.users["acme_guard"])

    assert (await user_service.get_user(guard, guard.user_id)).username == "acme_guard"
    with pytest.raises(PermissionDeniedError):
        await user_service.get_user(guard, world.acme.users["acme_guard2"].id)


@pytest.mark.asyncio
async def test_update_user_password_and_role(user_service, session, world):
    admin = scope_for(world.acme.users["acme_admin"])
    guard_id = world.acme.users["acme_guard"].id

    updated = await user_service.update_user(
        admin, guard_id, {"role": "supervisor", "password": "fresh-pass-1"}
    )

    assert updated.role == "supervisor"
    assert await UserRepository(session).authenticate(
        world.acme.company.id, "acme_guard", "fresh-pass-1"
    )


@pytest.mark.asyncio
async def test_delete_self_rejected(user_service, world):
    admin = scope_for(world.acme.users["acme_admin"])

    with pytest.raises(ValidationException):
        await user_service.delete_user(admin, admin.user_id)


@pytest.mark.asyncio
async def test_delete_user_of_other_company_not_found(user_service, world):
    with pytest.raises(ResourceNotFoundException):
        await user_service.delete_user(
            scope_for(world.acme.users["acme_admin"]), world.other.users["other_guard"].id
        )
