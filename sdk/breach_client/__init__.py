"""Breach Check Service Python Client SDK."""

from breach_client._async import AsyncBreachCheckClient
from breach_client._sync import BreachCheckClient
from breach_client.exceptions import (
    BreachServiceError,
    RateLimitError,
    ServerError,
    ValidationError,
)
from breach_client.models import CheckResult, HealthStatus

__all__ = [
    "BreachCheckClient",
    "AsyncBreachCheckClient",
    "BreachServiceError",
    "RateLimitError",
    "ValidationError",
    "ServerError",
    "CheckResult",
    "HealthStatus",
]
