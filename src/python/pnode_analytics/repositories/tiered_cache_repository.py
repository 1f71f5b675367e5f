"""Tiered cache: an ordered list of cache tiers tried in sequence.

The first *available* tier answers a read; when a tier fails at the
transport level the read moves on to the next tier, so callers never see
the difference between "remote miss" and "remote down, local consulted".
Writes and deletes go to every available tier in order, which keeps the
local tier as a shadow copy of the remote one.
"""

import logging
from time import time
from typing import Any, Optional
from prometheus_client import Counter, Histogram
from pnode_analytics.exceptions import CacheTierUnavailableException
from pnode_analytics.repositories.base_cache_repository import BaseCacheRepository

CACHE_EXE_COUNTER = Counter("pna_cache_exe_total", "Total number of cache operations executed", ["tier", "operation", "result"])
CACHE_EXE_DURATION_HISTOGRAM = Histogram("pna_cache_exe_duration_seconds", "Duration of cache operations in seconds", ["operation"])


class TieredCacheRepository:

    def __init__(self, tiers: list[BaseCacheRepository]):
        if not tiers:
            raise ValueError("TieredCacheRepository requires at least one tier")
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__tiers: tuple[BaseCacheRepository, ...] = tuple(tiers)

    @property
    def tiers(self) -> tuple[BaseCacheRepository, ...]:
        return self.__tiers

    async def initialize(self) -> None:
        """Best-effort connect of every tier. Never raises."""
        for tier in self.__tiers:
            try:
                connected: bool = await tier.connect()
            except Exception:
                self.__logger.warning(f"Cache tier '{tier.name}' failed to initialize", exc_info=True)
                continue
            if not connected:
                self.__logger.warning(f"Cache tier '{tier.name}' is not reachable, continuing without it")

    async def get(self, key: str) -> Optional[Any]:
        start_time: float = time()
        try:
            for tier in self.__tiers:
                if not tier.is_available:
                    continue
                try:
                    value: Optional[Any] = await tier.get(key)
                except CacheTierUnavailableException as e:
                    self.__logger.debug(f"Read of {key} fell through tier '{tier.name}': {e}")
                    CACHE_EXE_COUNTER.labels(tier=tier.name, operation="get", result="unavailable").inc()
                    continue
                CACHE_EXE_COUNTER.labels(tier=tier.name, operation="get", result="miss" if value is None else "hit").inc()
                return value
            return None
        finally:
            CACHE_EXE_DURATION_HISTOGRAM.labels(operation="get").observe(time() - start_time)

    async def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        start_time: float = time()
        try:
            for tier in self.__tiers:
                if not tier.is_available:
                    continue
                try:
                    await tier.set(key, value, ttl_seconds)
                    CACHE_EXE_COUNTER.labels(tier=tier.name, operation="set", result="ok").inc()
                except CacheTierUnavailableException as e:
                    self.__logger.debug(f"Write of {key} skipped tier '{tier.name}': {e}")
                    CACHE_EXE_COUNTER.labels(tier=tier.name, operation="set", result="unavailable").inc()
        finally:
            CACHE_EXE_DURATION_HISTOGRAM.labels(operation="set").observe(time() - start_time)

    async def delete(self, key: str) -> None:
        start_time: float = time()
        try:
            for tier in self.__tiers:
                if not tier.is_available:
                    continue
                try:
                    await tier.delete(key)
                    CACHE_EXE_COUNTER.labels(tier=tier.name, operation="delete", result="ok").inc()
                except CacheTierUnavailableException as e:
                    self.__logger.debug(f"Delete of {key} skipped tier '{tier.name}': {e}")
                    CACHE_EXE_COUNTER.labels(tier=tier.name, operation="delete", result="unavailable").inc()
        finally:
            CACHE_EXE_DURATION_HISTOGRAM.labels(operation="delete").observe(time() - start_time)

    async def close(self) -> None:
        for tier in self.__tiers:
            await tier.close()
