"""Breached password checking via k-anonymity range queries.

Only the first 5 characters of the password's SHA-1 digest are sent to the
range-query provider. The provider returns every known suffix sharing that
prefix and the match against the private suffix happens locally.

Fails safe: a timeout, rate limit or remote failure yields a ``CheckResult``
carrying an error and ``is_breached=False``. Provider failures never
propagate to the caller.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Iterator, NamedTuple

from app.config import settings
from app.exceptions import RateLimited, RemoteFailure, TransportTimeout, ValidationError
from app.models.check import CheckResult
from app.services.digest import split_digest
from app.services.range_provider import RangeProvider

logger = logging.getLogger(__name__)

ERROR_TIMEOUT = "timeout"
ERROR_RATE_LIMITED = "rate limited"
ERROR_UNAVAILABLE = "unable to check"

_PREFIX_RE = re.compile(r"[0-9A-Fa-f]{5}")


class RangeEntry(NamedTuple):
    suffix: str
    count: int


def _parse_count(raw: str) -> int:
    try:
        count = int(raw.strip())
    except ValueError:
        return 0
    return count if count >= 0 else 0


def parse_range_response(body: str) -> Iterator[RangeEntry]:
    """Yield ``RangeEntry`` records from a ``SUFFIX:COUNT`` response body.

    Blank lines and lines without a colon are skipped. Suffixes are
    upper-cased; an unparsable count becomes 0.
    """
    for line in body.splitlines():
        suffix, sep, count = line.strip().partition(":")
        if not sep or not suffix.strip():
            continue
        yield RangeEntry(suffix.strip().upper(), _parse_count(count))


async def resolve(
    prefix: str,
    suffix: str,
    provider: RangeProvider,
    *,
    timeout: float | None = None,
) -> CheckResult:
    """Query the provider with ``prefix`` and match ``suffix`` locally.

    Makes exactly one provider call, bounded by ``timeout`` seconds
    (``BREACH_REQUEST_TIMEOUT`` by default). No retries.
    """
    if not _PREFIX_RE.fullmatch(prefix):
        raise ValidationError("invalid prefix")

    timeout = settings.BREACH_REQUEST_TIMEOUT if timeout is None else timeout
    prefix = prefix.upper()

    try:
        body = await asyncio.wait_for(provider.fetch_range(prefix), timeout=timeout)
    except (asyncio.TimeoutError, TransportTimeout):
        logger.warning("Range query timed out after %.1fs", timeout)
        return CheckResult.failed(ERROR_TIMEOUT)
    except RateLimited as exc:
        logger.warning("Range query rate limited (Retry-After: %s)", exc.retry_after)
        return CheckResult.failed(ERROR_RATE_LIMITED)
    except RemoteFailure as exc:
        logger.error("Range query failed: %s", exc)
        return CheckResult.failed(ERROR_UNAVAILABLE)
    except Exception:
        logger.exception("Unexpected range provider error")
        return CheckResult.failed(ERROR_UNAVAILABLE)

    wanted = suffix.upper()
    for entry in parse_range_response(body):
        if entry.suffix == wanted:
            # Count 0 marks an Add-Padding record, not a breach
            return CheckResult(is_breached=entry.count > 0, breach_count=entry.count)
    return CheckResult(is_breached=False, breach_count=0)


async def check_password(
    password: str,
    provider: RangeProvider,
    *,
    timeout: float | None = None,
) -> CheckResult:
    """Check a single password against the breach corpus.

    Raises ValidationError for an empty password without contacting the
    provider.
    """
    prefix, suffix = split_digest(password)
    return await resolve(prefix, suffix, provider, timeout=timeout)
