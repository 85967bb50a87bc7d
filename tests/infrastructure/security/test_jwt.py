"""Tests for session token creation and verification"""

from datetime import timedelta

import pytest
from freezegun import freeze_time
from jose import jwt

from guardpost.infrastructure.security.jwt import create_access_token, verify_token
from guardpost.infrastructure.security.password import get_password_hash, verify_password

CLAIMS = {"sub": "user-1", "company_id": "company-1", "role": "guard"}
KEY = "unit-test-signing-key"


@freeze_time("2026-02-01 08:00:00")
def test_default_lifetime_is_twelve_hours():
    token = create_access_token(dict(CLAIMS), secret_key=KEY)
    payload = jwt.decode(token, KEY, algorithms=["HS256"], options={"verify_exp": False})

    assert payload["exp"] - payload["iat"] == 12 * 3600


def test_verify_round_trip_keeps_claims():
    payload = verify_token(create_access_token(dict(CLAIMS), secret_key=KEY), secret_key=KEY)

    assert payload["sub"] == "user-1"
    assert payload["company_id"] == "company-1"


def test_expired_token_rejected():
    token = create_access_token(dict(CLAIMS), secret_key=KEY, expires_delta=timedelta(seconds=-1))

    with pytest.raises(ValueError):
        verify_token(token, secret_key=KEY)


def test_token_signed_with_other_key_rejected():
    token = create_access_token(dict(CLAIMS), secret_key="rotated-key")

    with pytest.raises(ValueError):
        verify_token(token, secret_key=KEY)


def test_algorithm_is_honoured():
    token = create_access_token(dict(CLAIMS), secret_key=KEY, algorithm="HS512")

    assert jwt.get_unverified_header(token)["alg"] == "HS512"
    assert verify_token(token, secret_key=KEY, algorithm="HS512")["sub"] == "user-1"
    with pytest.raises(ValueError):
        verify_token(token, secret_key=KEY, algorithm="HS256")


def test_tampered_token_rejected():
    token = create_access_token(dict(CLAIMS), secret_key=KEY)
    forged = jwt.encode({**CLAIMS, "role": "admin"}, "another-key", algorithm="HS256")

    with pytest.raises(ValueError):
        verify_token(forged, secret_key=KEY)
    header, _, signature = token.split(".")
    with pytest.raises(ValueError):
        verify_token(f"{header}.{forged.split('.')[1]}.{signature}", secret_key=KEY)


def test_password_hashing():
    hashed = get_password_hash("s3cret-pass")

    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("s3cret-pass", "not-a-hash")
