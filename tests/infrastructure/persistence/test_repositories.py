"""Repository tests against SQLite"""

import pytest
from sqlalchemy import select

from conftest import PASSWORD, scope_for
from guardpost.application.pagination import PageRequest
from guardpost.domain.enums import ActivityEventType, SecurityStatus
from guardpost.infrastructure.persistence.models import ActivityLog, PatrolRound, Visitor
from guardpost.infrastructure.persistence.repositories import (
    ActivityLogRepository,
    CompanyRepository,
    PatrolRepository,
    PermissionRepository,
    UserRepository,
)


async def add_patrol(session, user, location="Main Gate", status=SecurityStatus.NORMAL):
    return await PatrolRepository(session).create(
        PatrolRound(
            company_id=user.company_id,
            guard_id=user.id,
            location=location,
            security_status=status.value,
        )
    )


@pytest.mark.asyncio
async def test_company_code_lookup_is_case_insensitive(session, world):
    repo = CompanyRepository(session)

    assert (await repo.get_by_code("acme")).id == world.acme.company.id
    assert await repo.get_by_code("NOPE") is None


@pytest.mark.asyncio
async def test_authenticate_scoped_to_company(session, world):
    """
    GIVEN the same username does not exist in OTHER
    WHEN authenticating acme_guard against OTHER
    THEN no user is returned
    """
    repo = UserRepository(session)

    assert (await repo.authenticate(world.acme.company.id, "ACME_GUARD", PASSWORD)) is not None
    assert await repo.authenticate(world.other.company.id, "acme_guard", PASSWORD) is None
    assert await repo.authenticate(world.acme.company.id, "acme_guard", "wrong") is None


@pytest.mark.asyncio
async def test_inactive_user_cannot_authenticate(session, world):
    repo = UserRepository(session)
    guard = await repo.get_by_id(world.acme.users["acme_guard"].id)
    guard.is_active = False
    await repo.update(guard)

    assert await repo.authenticate(world.acme.company.id, "acme_guard", PASSWORD) is None


@pytest.mark.asyncio
async def test_list_scoped_isolates_owner_and_company(session, world):
    guard = world.acme.users["acme_guard"]
    await add_patrol(session, guard)
    await add_patrol(session, world.acme.users["acme_guard2"])
    await add_patrol(session, world.other.users["other_guard"])
    repo = PatrolRepository(session)

    own = await repo.list_scoped(
        scope_for(guard), page=PageRequest(), order_by=PatrolRound.patrol_time
    )
    company = await repo.list_scoped(
        scope_for(world.acme.users["acme_super"]),
        page=PageRequest(),
        order_by=PatrolRound.patrol_time,
    )

    assert own.total == 1
    assert own.items[0].guard_id == guard.id
    assert company.total == 2
    assert {p.company_id for p in company.items} == {world.acme.company.id}


@pytest.mark.asyncio
async def test_get_scoped_hides_other_company_rows(session, world):
    patrol = await add_patrol(session, world.other.users["other_guard"])
    repo = PatrolRepository(session)

    assert await repo.get_scoped(patrol.id, scope_for(world.acme.users["acme_admin"])) is None
    assert await repo.get_in_company(patrol.id, world.acme.company.id) is None


@pytest.mark.asyncio
async def test_activity_log_is_append_only(session, world):
    repo = ActivityLogRepository(session)
    entry = await repo.append(
        ActivityLog(
            company_id=world.acme.company.id,
            event_type=ActivityEventType.LOGIN.value,
            description="login",
        )
    )

    with pytest.raises(TypeError):
        await repo.update(entry)
    with pytest.raises(TypeError):
        await repo.delete(entry)


@pytest.mark.asyncio
async def test_delete_user_keeps_visitors_and_drops_patrols(session, world):
    """
    GIVEN a guard with a patrol, a registered visitor and an activity entry
    WHEN the guard is deleted
    THEN the visitor survives with registered_by cleared and the patrol is removed
    """
    guard = world.acme.users["acme_guard"]
    patrol = await add_patrol(session, guard)
    session.add(
        Visitor(
            company_id=guard.company_id,
            registered_by=guard.id,
            full_name="Jane Visitor",
            id_number="ID-1",
        )
    )
    await ActivityLogRepository(session).append(
        ActivityLog(
            company_id=guard.company_id,
            event_type=ActivityEventType.PATROL.value,
            description="patrol",
            user_id=guard.id,
            patrol_id=patrol.id,
        )
    )
    await session.flush()

    repo = UserRepository(session)
    await repo.delete_with_dependents(await repo.get_by_id(guard.id))
    await session.commit()

    visitor = (await session.execute(select(Visitor))).scalar_one()
    entry = (await session.execute(select(ActivityLog))).scalar_one()
    assert visitor.registered_by is None
    assert entry.user_id is None and entry.patrol_id is None
    assert (await session.execute(select(PatrolRound))).first() is None


@pytest.mark.asyncio
async def test_delete_company_removes_tenant_data(session, world):
    await add_patrol(session, world.other.users["other_guard"])
    repo = CompanyRepository(session)

    await repo.delete_with_tenant_data(await repo.get_by_id(world.other.company.id))
    await session.commit()

    assert await repo.get_by_code("OTHER") is None
    assert await PermissionRepository(session).list_for_company(world.other.company.id) == []
    remaining = await UserRepository(session).count_in_company(world.acme.company.id)
    assert remaining == 4


@pytest.mark.asyncio
async def test_list_with_counts(session, world):
    await add_patrol(session, world.acme.users["acme_guard"])
    await session.commit()

    rows = await CompanyRepository(session).list_with_counts()
    overview = {company.code: (users, patrols) for company, users, patrols in rows}

    assert overview["ACME"] == (4, 1)
    assert overview["OTHER"] == (2, 0)
    assert overview["PLATFORM"] == (1, 0)
