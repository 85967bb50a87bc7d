"""Tests for the permission matrix and toggling"""

import pytest

from conftest import scope_for
from guardpost.application.services.activity_log_service import ActivityLogService
from guardpost.application.services.authorization_service import AuthorizationService
from guardpost.application.services.permission_service import PermissionService
from guardpost.domain.exceptions import PermissionDeniedError, ValidationException
from guardpost.infrastructure.persistence.repositories import (
    ActivityLogRepository,
    PermissionRepository,
)


@pytest.fixture
def permission_service(session):
    return PermissionService(
        PermissionRepository(session),
        AuthorizationService(PermissionRepository(session)),
        ActivityLogService(ActivityLogRepository(session)),
    )


@pytest.mark.asyncio
async def test_toggle_twice_restores_state(permission_service, world):
    """
    GIVEN guards hold mobile_login
    WHEN an admin toggles it twice
    THEN it is revoked and then granted again
    """
    admin = scope_for(world.acme.users["acme_admin"])

    first = await permission_service.toggle(admin, "guard", "mobile_login")
    matrix = await permission_service.list_permissions(admin)
    assert first.active is False
    assert "mobile_login" not in matrix["guard"]

    second = await permission_service.toggle(admin, "guard", "mobile_login")
    matrix = await permission_service.list_permissions(admin)
    assert second.active is True
    assert "mobile_login" in matrix["guard"]


@pytest.mark.asyncio
async def test_toggle_is_company_local(permission_service, world):
    await permission_service.toggle(scope_for(world.acme.users["acme_admin"]), "guard", "view_reports")

    other = await permission_service.list_permissions(scope_for(world.other.users["other_admin"]))

    assert "view_reports" not in other["guard"]


@pytest.mark.asyncio
async def test_matrix_lists_every_tenant_role(permission_service, world):
    matrix = await permission_service.list_permissions(scope_for(world.acme.users["acme_guard"]))

    assert "super_admin" not in matrix
    assert matrix["hr_manager"] == []
    assert sorted(matrix["supervisor"]) == [
        "manage_patrols",
        "manage_visitors",
        "mobile_login",
        "view_reports",
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "role,permission",
    [("super_admin", "mobile_login"), ("janitor", "mobile_login"), ("guard", "fly")],
)
async def test_toggle_rejects_invalid_input(permission_service, world, role, permission):
    with pytest.raises(ValidationException):
        await permission_service.toggle(scope_for(world.acme.users["acme_admin"]), role, permission)


@pytest.mark.asyncio
async def test_supervisor_cannot_toggle(permission_service, world):
    with pytest.raises(PermissionDeniedError):
        await permission_service.toggle(
            scope_for(world.acme.users["acme_super"]), "guard", "mobile_login"
        )
