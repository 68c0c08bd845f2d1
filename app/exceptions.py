"""Exception types for breach checks.

``ValidationError`` is raised to callers. The ``RangeQueryError`` family is
raised by range providers and converted to soft ``CheckResult`` errors by the
resolver, so it never reaches an API caller.
"""

from __future__ import annotations


class ValidationError(ValueError):
    """Raised on bad input, before any remote call is made."""


class RangeQueryError(Exception):
    """Base exception for range-query provider failures."""


class TransportTimeout(RangeQueryError):
    """The range query did not complete in time."""


class RateLimited(RangeQueryError):
    """The remote service rejected the query with HTTP 429."""

    def __init__(self, message: str = "rate limited", retry_after: str | None = None):
        self.retry_after = retry_after
        super().__init__(message)


class RemoteFailure(RangeQueryError):
    """Any other non-success response or transport error."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
