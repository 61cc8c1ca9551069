"""Rate limiting for the endpoints that call out to GitHub and Gemini.

Limits are per client IP and kept in process memory, so each worker
counts separately.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.scribe.core.config import get_settings
from src.scribe.core.logging import get_logger

logger = get_logger(__name__)


def get_rate_limit_key(request: Request) -> str:
    """Rate limit key: client IP only.

    Never include user-controlled headers here; rotating them would create
    unlimited fresh buckets.
    """
    return get_remote_address(request) or "unknown"


def generate_rate_limit() -> str:
    return get_settings().generate_rate_limit


def signin_rate_limit() -> str:
    return get_settings().signin_rate_limit


def create_limiter() -> Limiter:
    """Create the rate limiter. Disabled in the testing environment."""
    settings = get_settings()

    if settings.app_env == "testing":
        logger.info("Rate limiter disabled (testing environment)")
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    return Limiter(key_func=get_rate_limit_key)


# Reads settings at import time; restart to reconfigure
limiter = create_limiter()
