"""Tests for company login rules"""

from datetime import UTC, datetime, timedelta

import pytest

from guardpost.domain.entities import CompanyEntity
from guardpost.domain.enums import CompanyStatus
from guardpost.domain.exceptions import CompanyExpiredError, CompanySuspendedError

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def make_company(status=CompanyStatus.ACTIVE, expiry_date=None) -> CompanyEntity:
    return CompanyEntity(id="c1", code="ACME", name="Acme", status=status, expiry_date=expiry_date)


def test_active_company_without_expiry_can_login():
    make_company().ensure_can_login(NOW)


def test_past_expiry_date_is_expired():
    company = make_company(expiry_date=NOW - timedelta(seconds=1))

    assert company.is_expired(NOW)
    with pytest.raises(CompanyExpiredError):
        company.ensure_can_login(NOW)


def test_naive_expiry_date_treated_as_utc():
    """SQLite hands back naive datetimes"""
    company = make_company(expiry_date=datetime(2026, 3, 1, 13, 0))

    assert not company.is_expired(NOW)


def test_expired_status_flag():
    with pytest.raises(CompanyExpiredError):
        make_company(status=CompanyStatus.EXPIRED).ensure_can_login(NOW)


def test_suspension_checked_before_expiry():
    company = make_company(
        status=CompanyStatus.SUSPENDED, expiry_date=NOW - timedelta(days=3)
    )

    with pytest.raises(CompanySuspendedError):
        company.ensure_can_login(NOW)
