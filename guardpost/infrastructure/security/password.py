"""bcrypt password hashing."""

from functools import lru_cache

import bcrypt

from guardpost.infrastructure.config.settings import get_settings


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash"""
    try:
        result = bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
        assert isinstance(result, bool)
        return result
    except ValueError:
        return False


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt"""
    salt = bcrypt.gensalt(rounds=get_settings().bcrypt_rounds)
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    result = hashed.decode("utf-8")
    assert isinstance(result, str)
    return result


@lru_cache
def dummy_password_hash() -> str:
    """Real hash compared against when a username does not exist"""
    return get_password_hash("guardpost-dummy-password")
