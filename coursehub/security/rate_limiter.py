"""Sliding window rate limiting for credential endpoints."""

from __future__ import annotations

import logging
import time
from collections import defaultdict, deque
from threading import Lock
from typing import Deque, Protocol

from ..config import Settings

logger = logging.getLogger(__name__)


class RateLimiter(Protocol):
    def allow(self, key: str) -> bool: ...


class SlidingWindowRateLimiter:
    """Thread-safe in-process sliding window limiter."""

    def __init__(self, max_requests: int, window_seconds: int) -> None:
        self._max_requests = max_requests
        self._window = window_seconds
        self._events: defaultdict[str, Deque[float]] = defaultdict(deque)
        self._lock = Lock()
        self._last_sweep = time.monotonic()

    def allow(self, key: str) -> bool:
        """Return ``True`` when the request is within the configured rate limit."""
        now = time.monotonic()
        with self._lock:
            if now - self._last_sweep > self._window:
                self._sweep(now)
            queue = self._events[key]
            while queue and now - queue[0] > self._window:
                queue.popleft()
            if len(queue) >= self._max_requests:
                return False
            queue.append(now)
            return True

    def _sweep(self, now: float) -> None:
        # Drop keys with no event left inside the window.
        stale = [key for key, queue in self._events.items() if not queue or now - queue[-1] > self._window]
        for key in stale:
            del self._events[key]
        self._last_sweep = now

    def __len__(self) -> int:
        return len(self._events)


def build_rate_limiter(settings: Settings) -> RateLimiter:
    """Instantiate the configured limiter backend, preferring Redis when available."""
    if settings.rate_limit_backend == "redis" and settings.redis_url:
        import redis
        from redis.exceptions import RedisError

        from .redis_rate_limiter import RedisSlidingWindowRateLimiter

        client = redis.from_url(settings.redis_url)
        try:
            client.ping()
        except RedisError as exc:
            logger.warning("redis rate limiter unavailable, falling back to in-memory: %s", exc)
        else:
            logger.info("rate limiter configured for redis backend")
            return RedisSlidingWindowRateLimiter(
                client,
                max_requests=settings.rate_limit_requests,
                window_seconds=settings.rate_limit_window_seconds,
            )

    logger.info("rate limiter using in-memory backend")
    return SlidingWindowRateLimiter(
        max_requests=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )
