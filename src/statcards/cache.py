"""In-memory TTL cache with request coalescing."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)

DEFAULT_TTL = 3600  # 1 hour

_MISSING = object()


@dataclass
class _Entry:
    value: Any
    expires_at: float


class MemoryCache:
    """Key/value memoizer with lazy expiry.

    Concurrent ``get_or_compute`` calls for the same key share a single
    in-flight computation; calls for different keys never wait on each
    other. Failed computations are not stored.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._inflight: dict[str, asyncio.Task[Any]] = {}

    @property
    def ttl(self) -> float:
        return self._ttl

    @staticmethod
    def make_key(kind: str, identity: str) -> str:
        return f"{kind}:{identity}"

    def _lookup(self, key: str) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return _MISSING
        if self._clock() >= entry.expires_at:
            del self._entries[key]
            return _MISSING
        return entry.value

    def get(self, key: str, default: Any = None) -> Any:
        value = self._lookup(key)
        return default if value is _MISSING else value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        ttl = self._ttl if ttl is None else ttl
        self._entries[key] = _Entry(value=value, expires_at=self._clock() + ttl)

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return self._lookup(key) is not _MISSING

    def __len__(self) -> int:
        now = self._clock()
        return sum(1 for e in self._entries.values() if now < e.expires_at)

    async def _compute_and_store(
        self,
        key: str,
        compute: Callable[[], Awaitable[Any]],
        ttl: float | None,
    ) -> Any:
        try:
            value = await compute()
            # Expiry counts from completion, not from the start of the fetch.
            self.set(key, value, ttl)
            return value
        finally:
            self._inflight.pop(key, None)

    @staticmethod
    def _consume_result(task: asyncio.Task[Any]) -> None:
        # Mark retrieved so a fetch nobody awaits any more does not log a warning.
        if not task.cancelled():
            task.exception()

    async def get_or_compute(
        self,
        key: str,
        compute: Callable[[], Awaitable[Any]],
        ttl: float | None = None,
    ) -> Any:
        """Return the cached value for ``key``, computing it on a miss.

        The computation runs in its own task shared by every caller for
        ``key``; cancelling one caller does not cancel the fetch for the
        others.
        """
        value = self._lookup(key)
        if value is not _MISSING:
            logger.debug("cache hit: %s", key)
            return value

        task = self._inflight.get(key)
        if task is not None:
            logger.debug("cache coalesce: %s", key)
        else:
            logger.debug("cache miss: %s", key)
            task = asyncio.ensure_future(self._compute_and_store(key, compute, ttl))
            task.add_done_callback(self._consume_result)
            self._inflight[key] = task
        return await asyncio.shield(task)
