import logging
from time import time
from typing import Any, Optional
from injector import inject, singleton
from pydantic import ValidationError
from pnode_analytics.configs import AnalyticsConfig
from pnode_analytics.constants import PNODES_CACHE_KEY, PNODES_CACHE_TTL
from pnode_analytics.models import PNodeDetails
from pnode_analytics.repositories import TieredCacheRepository
from pnode_analytics.services.discovery import GossipDiscoveryService
from pnode_analytics.services.pnodes.stats_enrichment_service import StatsEnrichmentService
from pnode_analytics.utils import PNodeUtil


@singleton
class PNodeCacheService:

    @inject
    def __init__(self,
                 config: AnalyticsConfig,
                 cache: TieredCacheRepository,
                 discovery_service: GossipDiscoveryService,
                 stats_enrichment_service: StatsEnrichmentService):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__online_threshold_seconds = config.online_threshold_seconds
        self.__cache = cache
        self.__discovery_service = discovery_service
        self.__stats_enrichment_service = stats_enrichment_service

    async def get_all_pnodes(self) -> list[PNodeDetails]:
        # Get node set from cache, discovering on miss
        nodes: Optional[list[PNodeDetails]] = await self.__read_cached_nodes()
        if nodes is None:
            nodes, _ = await self.__discover_and_cache()
        return await self.__with_current_view(nodes)

    async def get_pnode(self, pubkey: str) -> Optional[PNodeDetails]:
        nodes: list[PNodeDetails] = await self.get_all_pnodes()
        return next((node for node in nodes if node.pubkey == pubkey), None)

    async def refresh(self) -> tuple[list[PNodeDetails], Optional[str]]:
        """Drop the cached node set and rediscover it.

        Returns the fresh node set together with the seed IP that served it.
        """
        self.__logger.info("Invalidating cached node set")
        await self.__cache.delete(PNODES_CACHE_KEY)
        nodes, source = await self.__discover_and_cache()
        return await self.__with_current_view(nodes), source

    async def __with_current_view(self, nodes: list[PNodeDetails]) -> list[PNodeDetails]:
        # Re-derive status against the current time
        nodes = PNodeUtil.with_current_status(nodes, time(), self.__online_threshold_seconds)

        # Merge cached per-node stats
        return await self.__stats_enrichment_service.enrich(nodes)

    async def __read_cached_nodes(self) -> Optional[list[PNodeDetails]]:
        cached: Optional[Any] = await self.__cache.get(PNODES_CACHE_KEY)
        if cached is None:
            return None
        try:
            return [PNodeDetails.model_validate(item) for item in cached]
        except (ValidationError, TypeError):
            self.__logger.warning("Cached node set is malformed, rediscovering")
            return None

    async def __discover_and_cache(self) -> tuple[list[PNodeDetails], Optional[str]]:
        discovered, source = await self.__discovery_service.discover_with_source()
        nodes: list[PNodeDetails] = PNodeUtil.dedupe_by_pubkey(discovered)
        # An empty set is cached as well, so an unreachable fleet is not hammered on every read
        await self.__cache.set(
            PNODES_CACHE_KEY,
            [node.model_dump(mode="json") for node in nodes],
            PNODES_CACHE_TTL
        )
        return nodes, source
