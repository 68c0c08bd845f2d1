"""Shared configuration and error-mapping logic for sync and async clients."""

from __future__ import annotations

import httpx

from breach_client.exceptions import (
    BreachServiceError,
    RateLimitError,
    ServerError,
    ValidationError,
)
from breach_client.models import CheckResult, HealthStatus

_STATUS_MAP: dict[int, type[BreachServiceError]] = {
    400: ValidationError,
    422: ValidationError,
}


def _retry_after(response: httpx.Response) -> int | None:
    value = response.headers.get("Retry-After")
    try:
        return int(value) if value is not None else None
    except ValueError:
        return None


def raise_for_status(response: httpx.Response) -> None:
    """Map non-2xx responses to typed exceptions."""
    if response.is_success:
        return

    code = response.status_code
    try:
        body = response.json()
        detail = body.get("detail", response.text)
    except Exception:
        detail = response.text

    # FastAPI schema errors carry a list of error objects
    if isinstance(detail, list):
        detail = "; ".join(
            str(item.get("msg", item)) if isinstance(item, dict) else str(item) for item in detail
        )

    if code == 429:
        raise RateLimitError(
            detail, status_code=code, detail=detail, retry_after=_retry_after(response)
        )
    if code in _STATUS_MAP:
        raise _STATUS_MAP[code](detail, status_code=code, detail=detail)
    if code >= 500:
        raise ServerError(detail, status_code=code, detail=detail)
    raise BreachServiceError(detail, status_code=code, detail=detail)


# ---------------------------------------------------------------------------
# Response parsers
# ---------------------------------------------------------------------------


def _parse_check_result(data: dict) -> CheckResult:
    return CheckResult(
        is_breached=data["isBreached"],
        breach_count=data.get("breachCount", 0),
        error=data.get("error"),
    )


def _parse_batch_results(data: dict) -> list[CheckResult]:
    return [_parse_check_result(r) for r in data["results"]]


def _parse_health(data: dict) -> HealthStatus:
    return HealthStatus(
        status=data["status"],
        timestamp=data["timestamp"],
    )


class BaseClientConfig:
    """Mixin providing URL helpers."""

    def __init__(self, base_url: str = "http://localhost:8000"):
        self._base_url = base_url.rstrip("/")

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"
