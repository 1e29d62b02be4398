"""Redis-backed sliding window limiter shared by all service replicas."""

from __future__ import annotations

import time
from typing import Final

from redis import Redis
from redis.exceptions import ResponseError

# KEYS[1] sorted set of hits; ARGV window_ms, max_requests, now_ms.
_ALLOW_SCRIPT: Final[str] = """
local key = KEYS[1]
local seq_key = key .. ':seq'
local window_ms = tonumber(ARGV[1])
local max_requests = tonumber(ARGV[2])
local now_ms = tonumber(ARGV[3])

redis.call('ZREMRANGEBYSCORE', key, 0, now_ms - window_ms)
if redis.call('ZCARD', key) >= max_requests then
    return 0
end
local seq = redis.call('INCR', seq_key)
redis.call('PEXPIRE', seq_key, window_ms)
redis.call('ZADD', key, now_ms, now_ms .. ':' .. seq)
redis.call('PEXPIRE', key, window_ms)
return 1
"""


class RedisSlidingWindowRateLimiter:
    """Sorted-set limiter; each hit is a member scored by its timestamp."""

    def __init__(
        self,
        client: Redis,
        *,
        max_requests: int,
        window_seconds: int,
        key_prefix: str = "coursehub:rate",
    ) -> None:
        self._client = client
        self._max_requests = max_requests
        self._window_ms = window_seconds * 1000
        self._key_prefix = key_prefix
        self._script = client.register_script(_ALLOW_SCRIPT)

    def allow(self, key: str) -> bool:
        """Return ``True`` when ``key`` is still within the distributed limit."""
        now_ms = int(time.time() * 1000)
        redis_key = f"{self._key_prefix}:{key}"
        try:
            result = self._script(keys=[redis_key], args=[self._window_ms, self._max_requests, now_ms])
        except ResponseError as exc:
            if "unknown command" not in str(exc).lower():
                raise
            return self._allow_without_lua(redis_key, now_ms)
        return int(result) == 1

    def _allow_without_lua(self, redis_key: str, now_ms: int) -> bool:
        """Same algorithm issued as plain commands, for servers without scripting."""
        client = self._client
        client.zremrangebyscore(redis_key, 0, now_ms - self._window_ms)
        if client.zcard(redis_key) >= self._max_requests:
            return False
        seq_key = f"{redis_key}:seq"
        seq = client.incr(seq_key)
        client.pexpire(seq_key, self._window_ms)
        client.zadd(redis_key, {f"{now_ms}:{seq}": now_ms})
        client.pexpire(redis_key, self._window_ms)
        return True
