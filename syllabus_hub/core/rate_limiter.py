"""
Rate Limiting for Campus Syllabus Hub API
=========================================
Implements rate limiting using slowapi (in-memory storage by default).

Limited endpoints:
- /auth/login, /auth/register, /auth/refresh: AUTH_RATE_LIMIT (20 per 15 minutes)
- /search/*: SEARCH_RATE_LIMIT (50 per 5 minutes)
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from syllabus_hub.core.config import settings
from syllabus_hub.core.logging_config import logger


def get_client_identifier(request: Request) -> str:
    """Rate limit key: forwarded client address when behind a proxy, else the socket peer"""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return f"ip:{forwarded.split(',')[0].strip()}"
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(
    key_func=get_client_identifier,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    enabled=settings.RATE_LIMIT_ENABLED,
    strategy="fixed-window",
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """
    Custom handler for rate limit exceeded errors.

    Returns a JSON 429 with the limit that was hit.
    """
    logger.warning(
        f"[RateLimit] Exceeded for {get_client_identifier(request)}: {exc.detail}",
        extra={"event_type": "rate_limited", "http_path": request.url.path}
    )

    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "detail": "Too many requests. Please try again later.",
            "error": {
                "code": "RATE_LIMITED",
                "message": "Too many requests. Please try again later.",
                "details": {"limit": str(exc.detail)},
            },
        },
    )


def auth_rate_limit():
    """Rate limit for credential endpoints"""
    return limiter.limit(settings.AUTH_RATE_LIMIT)


def search_rate_limit():
    """Rate limit for search endpoints"""
    return limiter.limit(settings.SEARCH_RATE_LIMIT)
