"""
Headline Cache

In-memory TTL cache for the current batch of transformed headlines.
TTL = 30 minutes by default.

The cache is an explicit object handed to whoever serves headlines;
it knows nothing about feeds or rewriting, only about an async loader
that produces records. A loader failure keeps the previous batch.

Usage:
    cache = HeadlineCache(loader=load_headlines, ttl_seconds=1800)
    records = await cache.get_or_refresh()
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

Loader = Callable[[], Awaitable[list[dict]]]


class HeadlineCache:
    """Process-scoped headline store with TTL refresh."""

    def __init__(self, loader: Loader, ttl_seconds: int = 1800):
        self._loader = loader
        self._ttl = ttl_seconds
        self._records: list[dict] = []
        self._last_fetch: Optional[float] = None
        self._lock = asyncio.Lock()
        self._hits = 0
        self._misses = 0

    def is_stale(self, now: Optional[float] = None) -> bool:
        if self._last_fetch is None:
            return True
        now = time.monotonic() if now is None else now
        return now - self._last_fetch > self._ttl

    async def get_or_refresh(self, now: Optional[float] = None) -> list[dict]:
        """Return cached records, refreshing first if never loaded or expired."""
        now = time.monotonic() if now is None else now
        async with self._lock:
            if self.is_stale(now):
                self._misses += 1
                await self._refresh_locked(now)
            else:
                self._hits += 1
            return list(self._records)

    async def refresh(self, now: Optional[float] = None) -> list[dict]:
        """Force a reload regardless of age."""
        now = time.monotonic() if now is None else now
        async with self._lock:
            await self._refresh_locked(now)
            return list(self._records)

    async def _refresh_locked(self, now: float) -> None:
        start = time.time()
        try:
            records = await self._loader()
        except Exception as e:
            logger.error(
                "Error refreshing headlines",
                extra={"error": str(e), "error_type": type(e).__name__},
                exc_info=True,
            )
            return

        self._records = list(records)
        self._last_fetch = now
        logger.info(
            "Headlines refreshed",
            extra={"count": len(self._records),
                   "duration_ms": int((time.time() - start) * 1000)},
        )

    @property
    def records(self) -> list[dict]:
        return list(self._records)

    @property
    def stats(self) -> dict:
        """Cache size and hit/miss statistics."""
        total = self._hits + self._misses
        return {
            "entries": len(self._records),
            "ttl_seconds": self._ttl,
            "loaded": self._last_fetch is not None,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / total, 3) if total > 0 else 0.0,
        }
