"""Rate limiting with slowapi, keyed by client address"""
from fastapi import FastAPI
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from guardpost.infrastructure.config.settings import Settings

limiter = Limiter(key_func=get_remote_address)

# Set from the application settings by configure_rate_limiting
_login_limit = "5/minute"


def login_rate_limit() -> str:
    """Limit applied to the login endpoint, e.g. '5/minute'"""
    return _login_limit


def configure_rate_limiting(app: FastAPI, settings: Settings) -> None:
    global _login_limit

    _login_limit = settings.login_rate_limit
    limiter.enabled = settings.rate_limit_enabled
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
