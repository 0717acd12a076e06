"""
Rate Limiting for the CampusOps API
===================================
Implements rate limiting using slowapi.

Only the credential endpoints are limited, keyed by client address:
- /api/login: LOGIN_RATE_LIMIT (default 5/minute, brute force protection)
- /api/register: REGISTER_RATE_LIMIT (default 10/minute)

Counters live in RATE_LIMIT_STORAGE_URL (in-process memory by default; any
`limits` storage URI such as redis:// works). RATE_LIMIT_ENABLED=false turns
the limiter off entirely.

The limiter is built once per process from the environment settings, so
every app created in the process shares it; a `config` passed to
`create_app` does not change it.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.logging_config import logger


def get_client_identifier(request: Request) -> str:
    """Rate limit key: the client address"""
    return f"ip:{get_remote_address(request)}"


# Create limiter instance
limiter = Limiter(
    key_func=get_client_identifier,
    storage_uri=settings.RATE_LIMIT_STORAGE_URL,
    enabled=settings.RATE_LIMIT_ENABLED,
    strategy="fixed-window",
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """
    Custom handler for rate limit exceeded errors.

    Returns the usual error body plus a Retry-After header.
    """
    logger.warning(
        f"[RateLimit] Exceeded for {get_client_identifier(request)}: {exc.detail}",
        extra={"event_type": "rate_limited", "http_path": request.url.path}
    )

    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": {
                "code": "RATE_LIMITED",
                "message": "Too many requests. Please slow down.",
                "details": {"limit": str(exc.detail)},
            },
        },
        headers={"Retry-After": "60"},
    )


def login_rate_limit():
    """Rate limit for /login"""
    return limiter.limit(settings.LOGIN_RATE_LIMIT)


def register_rate_limit():
    """Rate limit for /register"""
    return limiter.limit(settings.REGISTER_RATE_LIMIT)
