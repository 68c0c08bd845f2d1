"""
Rate limiting middleware for the password check endpoints.

Enforces per-client-IP limits:
  - /api/check-password: 100 requests per 15 minutes
  - /api/check-passwords-batch: 20 requests per 15 minutes

Counters live in the FixedWindowRateLimiter on ``app.state.rate_limiter``.
"""

from __future__ import annotations

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.config import settings
from app.dependencies import resolve_client_ip

logger = logging.getLogger(__name__)


def _rate_limits() -> dict[str, int]:
    """Map each rate-limited POST path to its max attempts per window."""
    return {
        "/api/check-password": settings.CHECK_RATE_LIMIT,
        "/api/check-passwords-batch": settings.BATCH_RATE_LIMIT,
    }


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rate limiting for password check API endpoints."""

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        limits = _rate_limits()

        # Only rate-limit the check endpoints
        if request.method != "POST" or path not in limits:
            return await call_next(request)

        client_ip = resolve_client_ip(request)

        try:
            limiter = request.app.state.rate_limiter
            allowed, retry_after = await limiter.hit(
                f"{path}:{client_ip}", limits[path], settings.RATE_LIMIT_WINDOW_SECONDS
            )
        except Exception:
            logger.exception("Rate limit check failed")
            if not settings.RATE_LIMIT_FAIL_OPEN:
                return JSONResponse(
                    status_code=503,
                    content={"detail": "Service temporarily unavailable. Please try again later."},
                )
            return await call_next(request)

        if not allowed:
            logger.info("Rate limit exceeded for %s on %s", client_ip, path)
            return JSONResponse(
                status_code=429,
                content={"detail": "Too many password check requests. Please try again later."},
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)
