"""Test permission matrix endpoints"""

import pytest
from fastapi import status


@pytest.mark.asyncio
async def test_matrix(client, world, headers):
    response = await client.get("/api/v1/permissions", headers=headers["acme_guard"])

    data = response.json()
    assert response.status_code == 200
    assert sorted(data["roles"]["guard"]) == ["manage_patrols", "manage_visitors", "mobile_login"]
    assert "manage_users" in data["available_permissions"]


@pytest.mark.asyncio
async def test_toggle_round_trip(client, world, headers):
    body = {"role": "supervisor", "permission": "manage_users"}

    first = await client.post("/api/v1/permissions/toggle", json=body, headers=headers["acme_admin"])
    second = await client.post("/api/v1/permissions/toggle", json=body, headers=headers["acme_admin"])
    matrix = await client.get("/api/v1/permissions", headers=headers["acme_admin"])

    assert first.json()["active"] is True
    assert second.json()["active"] is False
    assert "manage_users" not in matrix.json()["roles"]["supervisor"]


@pytest.mark.asyncio
async def test_guard_cannot_toggle(client, world, headers):
    response = await client.post(
        "/api/v1/permissions/toggle",
        json={"role": "guard", "permission": "view_reports"},
        headers=headers["acme_guard"],
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_unknown_permission_rejected(client, world, headers):
    response = await client.post(
        "/api/v1/permissions/toggle",
        json={"role": "guard", "permission": "launch_rockets"},
        headers=headers["acme_admin"],
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["details"] == {"field": "permission"}
