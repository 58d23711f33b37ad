"""
Rate Limiter — Per-Client Request Throttling

Simple sliding window rate limiter backed by an in-memory dict,
keyed by client address. Applied to every /api/ route.

Default: 100 requests per 15 minutes per client.
"""

from __future__ import annotations

import os
import time
import threading
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Optional

from fastapi import HTTPException


# Maximum number of unique clients tracked before LRU eviction
MAX_RATE_LIMIT_KEYS = 5000


@dataclass
class RateWindow:
    """Sliding window counter."""
    timestamps: list[float] = field(default_factory=list)

    def count_within(self, window_seconds: float) -> int:
        """Count requests within the sliding window."""
        cutoff = time.time() - window_seconds
        self.timestamps = [t for t in self.timestamps if t > cutoff]
        return len(self.timestamps)

    def record(self):
        self.timestamps.append(time.time())


@dataclass
class RateLimits:
    """Rate limit configuration."""
    max_requests: int = 100
    window_seconds: int = 15 * 60


DEFAULT_LIMITS = RateLimits(
    max_requests=int(os.getenv("BLAMEMOM_RATE_MAX_REQUESTS", "100")),
    window_seconds=int(os.getenv("BLAMEMOM_RATE_WINDOW", "900")),
)

# LRU-bounded store: client → RateWindow
_windows: OrderedDict[str, RateWindow] = OrderedDict()
_lock = threading.Lock()

RATE_LIMIT_ENABLED = os.getenv("BLAMEMOM_RATE_LIMIT", "true").lower() == "true"

TOO_MANY_REQUESTS = "Too many requests from this IP, please try again later."


def check_rate_limit(
    client_id: Optional[str],
    limits: Optional[RateLimits] = None,
) -> None:
    """
    Check and enforce rate limits for a client.

    Args:
        client_id: Client address. None = no limit.
        limits: Override default limits.

    Raises:
        HTTPException 429 if rate limit exceeded.
    """
    if not RATE_LIMIT_ENABLED:
        return
    if client_id is None:
        return

    limits = limits or DEFAULT_LIMITS

    with _lock:
        if client_id not in _windows:
            if len(_windows) >= MAX_RATE_LIMIT_KEYS:
                _windows.popitem(last=False)
            _windows[client_id] = RateWindow()
        else:
            _windows.move_to_end(client_id)

        window = _windows[client_id]

        if window.count_within(limits.window_seconds) >= limits.max_requests:
            retry_after = int(limits.window_seconds - (time.time() - window.timestamps[0]))
            raise HTTPException(
                status_code=429,
                detail=TOO_MANY_REQUESTS,
                headers={"Retry-After": str(max(retry_after, 1))},
            )

        window.record()


def get_usage(client_id: str, limits: Optional[RateLimits] = None) -> int:
    """Requests recorded for a client inside the current window."""
    limits = limits or DEFAULT_LIMITS
    with _lock:
        window = _windows.get(client_id)
        if not window:
            return 0
        return window.count_within(limits.window_seconds)


def get_remaining(client_id: str, limits: Optional[RateLimits] = None) -> int:
    """Requests a client may still make in the current window."""
    limits = limits or DEFAULT_LIMITS
    return max(limits.max_requests - get_usage(client_id, limits), 0)


def cleanup_stale_windows(max_age: float = 7200):
    """Remove windows with no recent activity. Call periodically."""
    cutoff = time.time() - max_age
    with _lock:
        stale = [
            k for k, w in _windows.items()
            if not w.timestamps or w.timestamps[-1] < cutoff
        ]
        for k in stale:
            del _windows[k]
