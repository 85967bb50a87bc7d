"""JWT session token handling."""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

DEFAULT_TOKEN_LIFETIME = timedelta(hours=12)


def create_access_token(
    data: dict[str, Any],
    *,
    secret_key: str,
    algorithm: str = "HS256",
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed session token carrying identity, role and company claims"""
    to_encode = data.copy()

    now = datetime.now(UTC)
    expire = now + (expires_delta or DEFAULT_TOKEN_LIFETIME)

    to_encode.update({"iat": now, "exp": expire})
    encoded_jwt = jwt.encode(to_encode, secret_key, algorithm=algorithm)
    assert isinstance(encoded_jwt, str)
    return encoded_jwt


def verify_token(token: str, *, secret_key: str, algorithm: str = "HS256") -> dict[str, Any]:
    """Verify signature and expiry of a session token, returns payload"""
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
        if not isinstance(payload, dict):
            raise ValueError("Token payload must be a dictionary")
        return payload
    except JWTError as e:
        raise ValueError(f"Invalid token: {str(e)}") from e
