from .base_cache_repository import BaseCacheRepository
from .local_cache_repository import LocalCacheRepository
from .redis_cache_repository import RedisCacheRepository
from .tiered_cache_repository import TieredCacheRepository

__all__ = [
    "BaseCacheRepository",
    "LocalCacheRepository",
    "RedisCacheRepository",
    "TieredCacheRepository"
]
