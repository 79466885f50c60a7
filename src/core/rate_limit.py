"""Rate limiting configuration using slowapi."""

import structlog
from fastapi import Request
from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from core.config import settings
from core.exceptions import ErrorCode

logger = structlog.get_logger()

# browsing and exporting are cheap; every write is a backend round trip
READ_LIMIT = "30/minute"
WRITE_LIMIT = "10/minute"

limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit_enabled,
)


async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """Render a 429 in the API error envelope, with Retry-After when known."""
    headers: dict[str, str] = {}
    if isinstance(exc, RateLimitExceeded):
        detail = exc.detail
        headers["Retry-After"] = str(exc.limit.limit.get_expiry())
    else:
        detail = str(exc)

    logger.warning(
        "rate_limit_exceeded",
        path=request.url.path,
        client=get_remote_address(request),
        limit=detail,
    )
    return ORJSONResponse(
        status_code=429,
        content={
            "error_code": ErrorCode.RATE_LIMIT_EXCEEDED.value,
            "message": f"Rate limit exceeded: {detail}",
            "details": {"limit": detail},
        },
        headers=headers,
    )
