"""Asynchronous Breach Check Service client built on httpx."""

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


class AsyncBreachCheckClient(BaseClientConfig):
    """Asynchronous client for the Breach Check Service API.

    Usage::

        async with AsyncBreachCheckClient("http://localhost:8000") as client:
            results = await client.check_passwords(["hunter2", "correct horse"])
    """

    def __init__(self, base_url: str = "http://localhost:8000", **httpx_kwargs):
        super().__init__(base_url)
        self._client = httpx.AsyncClient(**httpx_kwargs)

    # -- context manager ------------------------------------------------

    async def __aenter__(self) -> AsyncBreachCheckClient:
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    # -- helpers --------------------------------------------------------

    async def _post(self, path: str, *, json: dict | None = None) -> httpx.Response:
        resp = await self._client.post(self._url(path), json=json)
        raise_for_status(resp)
        return resp

    # ===================================================================
    # Password checks
    # ===================================================================

    async def check_password(self, password: str) -> CheckResult:
        resp = await self._post("/api/check-password", json={"password": password})
        return _parse_check_result(resp.json())

    async def check_passwords(self, passwords: list[str]) -> list[CheckResult]:
        resp = await self._post("/api/check-passwords-batch", json={"passwords": list(passwords)})
        return _parse_batch_results(resp.json())

    # ===================================================================
    # Health
    # ===================================================================

    async def health(self) -> HealthStatus:
        resp = await self._client.get(self._url("/api/health"))
        raise_for_status(resp)
        return _parse_health(resp.json())
