"""Sequential batch checks with fixed inter-request pacing.

Entries are resolved one at a time with a fixed pause between consecutive
range queries. A failure on one entry is reported in that entry's result
and never aborts the rest of the batch.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from app.config import settings
from app.exceptions import ValidationError
from app.models.check import CheckResult
from app.services.breach_check import check_password
from app.services.range_provider import RangeProvider

logger = logging.getLogger(__name__)


async def check_passwords_batch(
    passwords: Sequence[str],
    provider: RangeProvider,
    *,
    pacing: float | None = None,
    timeout: float | None = None,
) -> list[CheckResult]:
    """Check each password in order and return one result per input.

    Raises ValidationError before any network activity if the batch is
    empty or larger than ``BATCH_MAX_SIZE``. An empty password only fails
    its own entry.
    """
    if not passwords:
        raise ValidationError("passwords required")
    if len(passwords) > settings.BATCH_MAX_SIZE:
        raise ValidationError("batch too large")

    pacing = settings.BATCH_PACING_SECONDS if pacing is None else pacing

    results: list[CheckResult] = []
    for i, password in enumerate(passwords):
        try:
            results.append(await check_password(password, provider, timeout=timeout))
        except ValidationError as exc:
            results.append(CheckResult.failed(str(exc)))

        if i < len(passwords) - 1:
            await asyncio.sleep(pacing)

    failed = sum(1 for r in results if r.error)
    if failed:
        logger.info("Batch of %d finished with %d failed checks", len(results), failed)
    return results
