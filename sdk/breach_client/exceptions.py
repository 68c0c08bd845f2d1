"""Typed exception hierarchy for Breach Check Service API errors."""

from __future__ import annotations


class BreachServiceError(Exception):
    """Base exception for all Breach Check Service errors."""

    def __init__(self, message: str, status_code: int, detail: str | None = None):
        self.status_code = status_code
        self.detail = detail or message
        super().__init__(message)


class ValidationError(BreachServiceError):
    """Raised on 400 or 422 responses (bad request / validation failure)."""


class RateLimitError(BreachServiceError):
    """Raised on 429 responses (per-client rate limit exceeded)."""

    def __init__(
        self,
        message: str,
        status_code: int,
        detail: str | None = None,
        retry_after: int | None = None,
    ):
        self.retry_after = retry_after
        super().__init__(message, status_code=status_code, detail=detail)


class ServerError(BreachServiceError):
    """Raised on 5xx responses (server-side failure)."""
