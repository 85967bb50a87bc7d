"""Test super-admin company provisioning endpoints"""

import pytest
from fastapi import status

NEW_COMPANY = {
    "name": "Globex",
    "code": "globex",
    "admin_username": "globex_admin",
    "admin_password": "globex-pass-1",
    "admin_full_name": "Globex Admin",
}


@pytest.mark.asyncio
async def test_list_companies_with_counts(client, world, headers):
    response = await client.get("/api/v1/super-admin/companies", headers=headers["root"])

    counts = {c["code"]: c["user_count"] for c in response.json()}
    assert counts == {"PLATFORM": 1, "ACME": 4, "OTHER": 2}


@pytest.mark.asyncio
async def test_provision_company_and_log_in(client, world, headers):
    created = await client.post(
        "/api/v1/super-admin/companies", json=NEW_COMPANY, headers=headers["root"]
    )
    login = await client.post(
        "/api/v1/auth/login",
        json={"company_code": "GLOBEX", "username": "globex_admin", "password": "globex-pass-1"},
    )

    assert created.status_code == status.HTTP_201_CREATED
    assert created.json()["company"]["code"] == "GLOBEX"
    assert created.json()["admin_user"]["role"] == "admin"
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_duplicate_code_conflict(client, world, headers):
    locations_before = await client.get(
        "/api/v1/locations", params={"include_inactive": True}, headers=headers["acme_admin"]
    )
    response = await client.post(
        "/api/v1/super-admin/companies",
        json={**NEW_COMPANY, "code": "acme"},
        headers=headers["root"],
    )

    listing = await client.get("/api/v1/super-admin/companies", headers=headers["root"])
    locations_after = await client.get(
        "/api/v1/locations", params={"include_inactive": True}, headers=headers["acme_admin"]
    )
    login = await client.post(
        "/api/v1/auth/login",
        json={"company_code": "ACME", "username": "globex_admin", "password": "globex-pass-1"},
    )

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["error"] == "DUPLICATE_COMPANY_CODE"
    assert len(listing.json()) == 3
    assert {c["code"]: c["user_count"] for c in listing.json()} == {
        "PLATFORM": 1,
        "ACME": 4,
        "OTHER": 2,
    }
    assert len(locations_after.json()) == len(locations_before.json())
    assert login.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_failed_provisioning_leaves_nothing(client, world, headers):
    """
    GIVEN an admin password the schema rejects
    WHEN provisioning
    THEN no company is created
    """
    response = await client.post(
        "/api/v1/super-admin/companies",
        json={**NEW_COMPANY, "admin_password": "x"},
        headers=headers["root"],
    )
    listing = await client.get("/api/v1/super-admin/companies", headers=headers["root"])

    assert response.status_code == 422
    assert "GLOBEX" not in {c["code"] for c in listing.json()}


@pytest.mark.asyncio
async def test_tenant_admin_forbidden(client, world, headers):
    response = await client.get("/api/v1/super-admin/companies", headers=headers["acme_admin"])

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["message"] == "Super admin access required"


@pytest.mark.asyncio
async def test_update_without_fields_rejected(client, world, headers):
    response = await client.put(
        f"/api/v1/super-admin/companies/{world.acme.company.id}", json={}, headers=headers["root"]
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
async def test_delete_company(client, world, headers):
    response = await client.delete(
        f"/api/v1/super-admin/companies/{world.other.company.id}", headers=headers["root"]
    )
    login = await client.post(
        "/api/v1/auth/login",
        json={"company_code": "OTHER", "username": "other_admin", "password": "password123"},
    )

    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert login.json()["error"] == "INVALID_COMPANY"


@pytest.mark.asyncio
async def test_platform_company_protected(client, world, headers):
    response = await client.delete(
        f"/api/v1/super-admin/companies/{world.platform.company.id}", headers=headers["root"]
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["name", "status", "subscription_plan", "max_users"])
async def test_update_with_null_required_field_rejected(client, world, headers, field):
    response = await client.put(
        f"/api/v1/super-admin/companies/{world.acme.company.id}",
        json={field: None},
        headers=headers["root"],
    )
    company = await client.get(
        f"/api/v1/super-admin/companies/{world.acme.company.id}", headers=headers["root"]
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "VALIDATION_ERROR"
    assert response.json()["details"] == {"field": field}
    assert company.json()["name"] == "Acme Industries"
    assert company.json()["status"] == "active"


@pytest.mark.asyncio
async def test_update_with_null_expiry_removes_expiry(client, world, headers):
    response = await client.put(
        f"/api/v1/super-admin/companies/{world.acme.company.id}",
        json={"expiry_date": None},
        headers=headers["root"],
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["expiry_date"] is None


@pytest.mark.asyncio
async def test_huge_expiry_days_rejected(client, world, headers):
    response = await client.post(
        "/api/v1/super-admin/companies",
        json={**NEW_COMPANY, "expiry_days": 5_000_000},
        headers=headers["root"],
    )
    listing = await client.get("/api/v1/super-admin/companies", headers=headers["root"])

    assert response.status_code == 422
    assert "GLOBEX" not in {c["code"] for c in listing.json()}
