"""Tests for the exception to status code mapping"""

import pytest

from guardpost.domain.exceptions import (
    AuthenticationException,
    CompanyExpiredError,
    DuplicateCompanyCodeError,
    GuardpostException,
    InvalidCompanyError,
    PermissionDeniedError,
    ResourceNotFoundException,
    ValidationException,
)
from guardpost.presentation.api.errors import status_code_for


@pytest.mark.parametrize(
    "exc,expected",
    [
        (InvalidCompanyError(), 401),
        (AuthenticationException(), 401),
        (CompanyExpiredError(), 403),
        (PermissionDeniedError(), 403),
        (ResourceNotFoundException("Patrol", "p1"), 404),
        (DuplicateCompanyCodeError("ACME"), 409),
        (ValidationException("bad"), 400),
        (GuardpostException("unmapped"), 500),
    ],
)
def test_status_code_for(exc, expected):
    assert status_code_for(exc) == expected


def test_error_body_shape():
    body = ResourceNotFoundException("Visitor", "v1").to_dict()

    assert body == {
        "error": "NOT_FOUND",
        "message": "Visitor not found: v1",
        "details": {"resource_type": "Visitor", "resource_id": "v1"},
    }
