"""Test patrol checkpoint location endpoints"""

import pytest
from fastapi import status


@pytest.mark.asyncio
async def test_default_locations_seeded(client, world, headers):
    response = await client.get("/api/v1/locations", headers=headers["acme_guard"])

    assert response.status_code == 200
    assert len(response.json()) == 10


@pytest.mark.asyncio
async def test_admin_manages_locations(client, world, headers):
    created = await client.post(
        "/api/v1/locations",
        json={"code": "roof", "name": "Roof Access"},
        headers=headers["acme_admin"],
    )
    location_id = created.json()["id"]

    updated = await client.put(
        f"/api/v1/locations/{location_id}",
        json={"is_active": False},
        headers=headers["acme_admin"],
    )
    active = await client.get("/api/v1/locations", headers=headers["acme_admin"])
    everything = await client.get(
        "/api/v1/locations?include_inactive=true", headers=headers["acme_admin"]
    )
    deleted = await client.delete(f"/api/v1/locations/{location_id}", headers=headers["acme_admin"])

    assert created.status_code == status.HTTP_201_CREATED
    assert created.json()["code"] == "ROOF"
    assert updated.json()["is_active"] is False
    assert len(active.json()) == 10
    assert len(everything.json()) == 11
    assert deleted.status_code == status.HTTP_204_NO_CONTENT


@pytest.mark.asyncio
async def test_duplicate_code_rejected(client, world, headers):
    response = await client.post(
        "/api/v1/locations",
        json={"code": "main-gate", "name": "Another Gate"},
        headers=headers["acme_admin"],
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
async def test_guard_cannot_create(client, world, headers):
    response = await client.post(
        "/api/v1/locations",
        json={"code": "SHED", "name": "Shed"},
        headers=headers["acme_guard"],
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_other_company_location_not_found(client, world, headers):
    other = await client.get("/api/v1/locations", headers=headers["other_admin"])

    response = await client.delete(
        f"/api/v1/locations/{other.json()[0]['id']}", headers=headers["acme_admin"]
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
