"""
Rate Limiting - Protect the extraction endpoint from abuse.

Extraction is CPU-bound, so a burst of large uploads from one client can
starve everyone else.
"""
from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address
from ..core.config import RATE_LIMIT_ENABLED, RATE_LIMIT_PER_MINUTE


def get_rate_limit_key(request: Request) -> str:
    """
    Get rate limit key for request.

    Uses the X-API-Key header when present, otherwise the client address.
    """
    api_key = request.headers.get("X-API-Key")
    if api_key:
        return f"api_key:{api_key}"
    return get_remote_address(request)


limiter = Limiter(
    key_func=get_rate_limit_key,
    enabled=RATE_LIMIT_ENABLED
)

# Rate limit decorator for extraction routes
rate_limit_per_minute = limiter.limit(f"{RATE_LIMIT_PER_MINUTE}/minute")
