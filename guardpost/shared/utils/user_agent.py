"""Device classification from the User-Agent header."""

import re

_MOBILE_PATTERN = re.compile(
    r"Android|webOS|iPhone|iPad|iPod|BlackBerry|Windows Phone|Mobile|IEMobile|Opera Mini",
    re.IGNORECASE,
)


def is_mobile_user_agent(user_agent: str | None) -> bool:
    """True when the User-Agent string looks like a phone or tablet browser"""
    if not user_agent:
        return False
    return _MOBILE_PATTERN.search(user_agent) is not None
