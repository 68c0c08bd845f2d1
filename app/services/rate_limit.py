"""In-memory fixed-window rate limiting.

The limiter is owned by the application (``app.state.rate_limiter``) and
injected into the middleware. All reads and writes of the counters happen
under a single ``asyncio.Lock``.
"""

from __future__ import annotations

import asyncio
import math
import time
from typing import Callable

# Expired windows are pruned once this many keys are tracked
_PRUNE_THRESHOLD = 10_000


class FixedWindowRateLimiter:
    """Counts hits per key within a fixed window.

    Each key's window starts at its first hit and resets once
    ``window_seconds`` have elapsed.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._lock = asyncio.Lock()
        # key -> (window_start, attempts)
        self._windows: dict[str, tuple[float, int]] = {}

    def __len__(self) -> int:
        return len(self._windows)

    async def hit(self, key: str, max_attempts: int, window_seconds: int) -> tuple[bool, int]:
        """Record an attempt for ``key``.

        Returns:
            (is_allowed, retry_after_seconds)
        """
        async with self._lock:
            now = self._clock()
            if len(self._windows) >= _PRUNE_THRESHOLD:
                self._prune(now, window_seconds)

            window_start, attempts = self._windows.get(key, (now, 0))

            if now - window_start >= window_seconds:
                window_start, attempts = now, 0

            if attempts >= max_attempts:
                retry_after = max(math.ceil(window_start + window_seconds - now), 1)
                return (False, retry_after)

            self._windows[key] = (window_start, attempts + 1)
            return (True, 0)

    def _prune(self, now: float, window_seconds: int) -> None:
        expired = [k for k, (start, _) in self._windows.items() if now - start >= window_seconds]
        for key in expired:
            del self._windows[key]

    async def reset(self) -> None:
        """Clear all counters (for testing)."""
        async with self._lock:
            self._windows.clear()
