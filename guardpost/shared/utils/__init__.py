from guardpost.shared.utils.datetime import day_bounds, ensure_utc, utc_now
from guardpost.shared.utils.generators import generate_cuid
from guardpost.shared.utils.user_agent import is_mobile_user_agent

__all__ = [
    "day_bounds",
    "ensure_utc",
    "generate_cuid",
    "is_mobile_user_agent",
    "utc_now",
]
