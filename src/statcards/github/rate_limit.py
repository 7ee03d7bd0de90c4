"""GitHub API rate limit monitoring."""

from __future__ import annotations

import logging
import time
from typing import Callable

import httpx

from ..errors import UpstreamError

logger = logging.getLogger(__name__)


class RateLimitMonitor:
    """Tracks the GitHub rate limit budget from response headers.

    Once the budget is spent, requests fail fast until the reset time
    instead of spending a round trip on a guaranteed 403.
    """

    def __init__(
        self, threshold: int = 0, clock: Callable[[], float] = time.time
    ) -> None:
        self._remaining: int | None = None
        self._reset_at: float | None = None
        self._threshold = threshold
        self._clock = clock

    @property
    def remaining(self) -> int | None:
        return self._remaining

    def update(self, response: httpx.Response) -> None:
        remaining = response.headers.get("X-RateLimit-Remaining")
        reset_at = response.headers.get("X-RateLimit-Reset")
        if remaining is not None:
            self._remaining = int(remaining)
        if reset_at is not None:
            self._reset_at = float(reset_at)

    @property
    def exhausted(self) -> bool:
        return (
            self._remaining is not None
            and self._remaining <= self._threshold
            and self._reset_at is not None
            and self._reset_at > self._clock()
        )

    def check(self) -> None:
        if self.exhausted:
            wait_seconds = int(self._reset_at - self._clock()) + 1
            logger.warning("Rate limit exhausted, resets in %ds", wait_seconds)
            raise UpstreamError(
                403, f"API rate limit exceeded, resets in {wait_seconds}s"
            )
