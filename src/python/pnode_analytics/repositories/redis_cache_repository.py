"""Remote cache tier backed by Redis.

Values are stored as a JSON envelope ``{"value": ..., "expires_at": ...}``
with a matching ``PX`` expiry. Reads validate ``expires_at`` themselves, so
an entry is a miss at or after its expiry even if Redis has not yet evicted
it.

Connectivity failures (refused connection, timeout, protocol error) mark the
tier unavailable for ``retry_interval_seconds``; during that window the tier
reports ``is_available == False`` and is skipped by ``TieredCacheRepository``.
After the window the next operation tries Redis again.
"""

import asyncio
import json
import logging
import time
from typing import Any, Awaitable, Callable, Optional
from redis.asyncio import Redis
from redis.exceptions import RedisError
from pnode_analytics.exceptions import CacheTierUnavailableException
from pnode_analytics.repositories.base_cache_repository import BaseCacheRepository


class RedisCacheRepository(BaseCacheRepository):

    def __init__(self,
                 redis_url: str,
                 key_prefix: str = "",
                 connect_timeout_seconds: float = 2.0,
                 operation_timeout_seconds: float = 1.0,
                 retry_interval_seconds: float = 30.0,
                 clock: Callable[[], float] = time.time,
                 client: Optional[Redis] = None):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__redis_url = redis_url
        self.__key_prefix = key_prefix
        self.__connect_timeout_seconds = connect_timeout_seconds
        self.__operation_timeout_seconds = operation_timeout_seconds
        self.__retry_interval_seconds = retry_interval_seconds
        self.__clock = clock
        self.__client: Optional[Redis] = client
        self.__unavailable_until: Optional[float] = None

    @property
    def name(self) -> str:
        return "redis"

    @property
    def is_available(self) -> bool:
        if self.__client is None:
            return False
        if self.__unavailable_until is None:
            return True
        return self.__clock() >= self.__unavailable_until

    async def connect(self) -> bool:
        try:
            if self.__client is None:
                self.__client = Redis.from_url(
                    self.__redis_url,
                    socket_connect_timeout=self.__connect_timeout_seconds,
                    socket_timeout=self.__operation_timeout_seconds,
                    decode_responses=True
                )
            await asyncio.wait_for(self.__client.ping(), timeout=self.__connect_timeout_seconds)
        except (RedisError, OSError, asyncio.TimeoutError, ValueError) as e:
            self.__mark_unavailable(f"connect failed: {e}")
            return False
        self.__unavailable_until = None
        self.__logger.info(f"Connected to Redis at {self.__redis_url}")
        return True

    async def get(self, key: str) -> Optional[Any]:
        raw: Optional[str] = await self.__execute(lambda client: client.get(self.__full_key(key)))
        if raw is None:
            return None
        try:
            envelope: dict = json.loads(raw)
            if self.__clock() >= envelope["expires_at"]:
                return None
            return envelope["value"]
        except (ValueError, KeyError, TypeError):
            self.__logger.warning(f"Discarding malformed cache entry for key {key}")
            return None

    async def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        envelope: str = json.dumps({
            "value": value,
            "expires_at": self.__clock() + ttl_seconds
        })
        ttl_ms: int = max(1, int(ttl_seconds * 1000))
        await self.__execute(lambda client: client.set(self.__full_key(key), envelope, px=ttl_ms))

    async def delete(self, key: str) -> None:
        await self.__execute(lambda client: client.delete(self.__full_key(key)))

    async def close(self) -> None:
        if self.__client is None:
            return
        try:
            await self.__client.aclose()
        except (RedisError, OSError) as e:
            self.__logger.debug(f"Error while closing Redis client: {e}")
        self.__client = None

    async def __execute(self, operation: Callable[[Redis], Awaitable[Any]]) -> Any:
        if not self.is_available or self.__client is None:
            raise CacheTierUnavailableException(self.name, "not connected")
        try:
            result = await asyncio.wait_for(operation(self.__client), timeout=self.__operation_timeout_seconds)
        except (RedisError, OSError, asyncio.TimeoutError) as e:
            self.__mark_unavailable(str(e) or e.__class__.__name__)
            raise CacheTierUnavailableException(self.name, str(e)) from e
        if self.__unavailable_until is not None:
            self.__logger.info("Redis is reachable again, resuming remote cache tier")
            self.__unavailable_until = None
        return result

    def __mark_unavailable(self, reason: str) -> None:
        if self.__unavailable_until is None or self.__clock() >= self.__unavailable_until:
            self.__logger.warning(
                f"Redis unavailable ({reason}), falling back to in-memory cache for {self.__retry_interval_seconds:.0f}s"
            )
        self.__unavailable_until = self.__clock() + self.__retry_interval_seconds

    def __full_key(self, key: str) -> str:
        return f"{self.__key_prefix}{key}"
