"""In-process cache tier.

Entries are kept in a plain dict of ``CacheEntry`` objects. TTL eviction is
lazy: every read validates ``expires_at`` before returning, so no background
sweeper is needed. All operations are synchronous between awaits, which makes
each ``set`` atomic for its key on the event loop.
"""

import time
from typing import Any, Callable, Optional
from pnode_analytics.models import CacheEntry
from pnode_analytics.repositories.base_cache_repository import BaseCacheRepository


class LocalCacheRepository(BaseCacheRepository):

    def __init__(self, clock: Callable[[], float] = time.time):
        self.__clock = clock
        # key -> CacheEntry
        self.__entries: dict[str, CacheEntry] = {}

    @property
    def name(self) -> str:
        return "local"

    @property
    def is_available(self) -> bool:
        return True

    async def get(self, key: str) -> Optional[Any]:
        entry: Optional[CacheEntry] = self.__entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self.__clock()):
            self.__entries.pop(key, None)
            return None
        return entry.value

    async def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        self.__entries[key] = CacheEntry(
            key=key,
            value=value,
            expires_at=self.__clock() + ttl_seconds
        )

    async def delete(self, key: str) -> None:
        self.__entries.pop(key, None)

    def size(self) -> int:
        now: float = self.__clock()
        return sum(1 for entry in self.__entries.values() if not entry.is_expired(now))

    def purge_expired(self) -> int:
        now: float = self.__clock()
        expired_keys: list[str] = [key for key, entry in self.__entries.items() if entry.is_expired(now)]
        for key in expired_keys:
            del self.__entries[key]
        return len(expired_keys)
