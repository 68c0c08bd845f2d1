"""Synchronous Breach Check Service client built on httpx."""

from __future__ import annotations

import httpx

from breach_client._base import (
    BaseClientConfig,
    _parse_batch_results,
    _parse_check_result,
    _parse_health,
    raise_for_status,
)
from breach_client.models import CheckResult, HealthStatus


class BreachCheckClient(BaseClientConfig):
    """Synchronous client for the Breach Check Service API.

    Usage::

        with BreachCheckClient("http://localhost:8000") as client:
            result = client.check_password("hunter2")
            if result.is_breached:
                print(f"Seen {result.breach_count} times")
    """

    def __init__(self, base_url: str = "http://localhost:8000", **httpx_kwargs):
        super().__init__(base_url)
        self._client = httpx.Client(**httpx_kwargs)

    # -- context manager ------------------------------------------------

    def __enter__(self) -> BreachCheckClient:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # -- helpers --------------------------------------------------------

    def _post(self, path: str, *, json: dict | None = None) -> httpx.Response:
        resp = self._client.post(self._url(path), json=json)
        raise_for_status(resp)
        return resp

    # ===================================================================
    # Password checks
    # ===================================================================

    def check_password(self, password: str) -> CheckResult:
        resp = self._post("/api/check-password", json={"password": password})
        return _parse_check_result(resp.json())

    def check_passwords(self, passwords: list[str]) -> list[CheckResult]:
        """Check up to 10 passwords; results are in input order."""
        resp = self._post("/api/check-passwords-batch", json={"passwords": list(passwords)})
        return _parse_batch_results(resp.json())

    # ===================================================================
    # Health
    # ===================================================================

    def health(self) -> HealthStatus:
        resp = self._client.get(self._url("/api/health"))
        raise_for_status(resp)
        return _parse_health(resp.json())
