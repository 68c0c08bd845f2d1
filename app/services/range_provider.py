"""Range-query providers for the Pwned Passwords k-anonymity API.

A provider takes a 5-character hash prefix and returns the raw response body
(newline-separated ``SUFFIX:COUNT`` records), or raises a ``RangeQueryError``
subclass. ``HttpRangeProvider`` is the production implementation; tests
substitute a deterministic fake.
"""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from app.config import settings
from app.exceptions import RateLimited, RemoteFailure, TransportTimeout

logger = logging.getLogger(__name__)


class RangeProvider(Protocol):
    async def fetch_range(self, prefix: str) -> str: ...


class HttpRangeProvider:
    """Queries ``{base_url}/{prefix}`` over a shared ``httpx.AsyncClient``."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        base_url: str | None = None,
        user_agent: str | None = None,
        add_padding: bool | None = None,
    ):
        self._client = client
        self._base_url = (base_url or settings.BREACH_API_URL).rstrip("/")
        self._user_agent = user_agent or settings.BREACH_USER_AGENT
        self._add_padding = settings.BREACH_ADD_PADDING if add_padding is None else add_padding

    def _headers(self) -> dict[str, str]:
        headers = {"User-Agent": self._user_agent}
        if self._add_padding:
            headers["Add-Padding"] = "true"
        return headers

    async def fetch_range(self, prefix: str) -> str:
        url = f"{self._base_url}/{prefix}"
        try:
            resp = await self._client.get(url, headers=self._headers())
        except httpx.TimeoutException as exc:
            raise TransportTimeout("range query timed out") from exc
        except httpx.HTTPError as exc:
            raise RemoteFailure(f"range query failed: {type(exc).__name__}") from exc

        if resp.status_code == 429:
            raise RateLimited(retry_after=resp.headers.get("Retry-After"))
        if not resp.is_success:
            raise RemoteFailure(
                f"range query returned HTTP {resp.status_code}", status_code=resp.status_code
            )

        logger.debug("Range query for prefix %s returned %d bytes", prefix, len(resp.content))
        return resp.text
