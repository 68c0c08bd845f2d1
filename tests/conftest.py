"""Root test fixtures.

Environment overrides are set BEFORE any app imports so that the app
configuration module picks up test values.
"""

import os

# ---------------------------------------------------------------------------
# Environment overrides: MUST be set before importing anything from `app`
# ---------------------------------------------------------------------------
os.environ["BREACH_API_URL"] = "https://range.test/range"
os.environ["BREACH_REQUEST_TIMEOUT"] = "10"
os.environ["BATCH_PACING_SECONDS"] = "0.1"
os.environ["DEBUG"] = "1"

import asyncio
import hashlib

import httpx
import pytest

# Now safe to import app modules
from app.exceptions import RemoteFailure
from app.main import app


def sha1_parts(password: str) -> tuple[str, str]:
    """Reference (prefix, suffix) split computed independently of the app."""
    digest = hashlib.sha1(password.encode("utf-8")).hexdigest().upper()
    return digest[:5], digest[5:]


class FakeRangeProvider:
    """Deterministic stand-in for the remote range-query service.

    ``responses`` maps a prefix to either a response body, an exception
    instance to raise, or a float number of seconds to hang for.
    Unknown prefixes return an empty body.
    """

    def __init__(self, responses: dict | None = None):
        self.responses = responses or {}
        self.calls: list[str] = []

    async def fetch_range(self, prefix: str) -> str:
        self.calls.append(prefix)
        response = self.responses.get(prefix, "")
        if isinstance(response, BaseException):
            raise response
        if isinstance(response, float):
            await asyncio.sleep(response)
            raise RemoteFailure("fake provider hang finished")
        return response

    def breach(self, password: str, count: int = 1) -> None:
        """Register ``password`` as breached ``count`` times."""
        prefix, suffix = sha1_parts(password)
        existing = self.responses.get(prefix, "")
        line = f"{suffix}:{count}"
        self.responses[prefix] = f"{existing}\r\n{line}" if existing else line


@pytest.fixture
def fake_provider():
    return FakeRangeProvider()


@pytest.fixture
async def test_client(fake_provider):
    """Async HTTP test client backed by the FastAPI ASGI app.

    The range provider is replaced with ``fake_provider`` and the rate
    limiter is cleared before and after each test.
    """
    original = app.state.range_provider
    app.state.range_provider = fake_provider
    await app.state.rate_limiter.reset()

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client

    app.state.range_provider = original
    await app.state.rate_limiter.reset()
