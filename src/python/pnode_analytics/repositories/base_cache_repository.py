from abc import ABC, abstractmethod
from typing import Any, Optional


class BaseCacheRepository(ABC):
    """A single cache tier.

    ``get`` returns ``None`` on a miss (including an expired entry). A tier
    whose backing store cannot be reached raises
    ``CacheTierUnavailableException`` instead of returning a miss, so that a
    "store unavailable" is never confused with "key not present".
    """

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def is_available(self) -> bool:
        pass

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        pass

    async def connect(self) -> bool:
        return True

    async def close(self) -> None:
        pass
