"""
Rate Limiter

Fixed-window attempt counter keyed by client identity (usually the remote IP).
Counters live in process memory and reset on restart.
"""

import asyncio
import logging
import time
from typing import Callable, Dict, Tuple

from src.domain.result import Error, ErrorCode, Result, Return

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Bounds attempts per key within a time window.

    Business Rules:
    - The first attempt for a key opens a window of window_seconds
    - Attempts beyond max_attempts inside the window are rejected
    - Rejected attempts still count, so hammering does not help
    - A new window opens once the previous one has elapsed
    """

    def __init__(
        self,
        max_attempts: int,
        window_seconds: float,
        name: str = "default",
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.name = name
        self._clock = clock
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._lock = asyncio.Lock()

    async def check(self, key: str) -> Result[None]:
        """Record one attempt for key and decide whether it is allowed"""
        async with self._lock:
            now = self._clock()
            self._purge_expired(now)

            window_start, count = self._windows.get(key, (now, 0))
            count += 1
            self._windows[key] = (window_start, count)

        if count > self.max_attempts:
            logger.warning(
                "Rate limit exceeded",
                extra={"limiter": self.name, "key": key, "attempts": count},
            )
            return Return.err(
                Error(
                    ErrorCode.RATE_LIMIT_EXCEEDED,
                    "Too many attempts, please try again later",
                )
            )

        return Return.ok(None)

    async def reset(self) -> None:
        async with self._lock:
            self._windows.clear()

    def _purge_expired(self, now: float) -> None:
        expired = [
            key
            for key, (window_start, _) in self._windows.items()
            if now - window_start >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]
