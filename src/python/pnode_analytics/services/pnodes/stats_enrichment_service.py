import asyncio
import logging
from typing import Any, Optional
from injector import inject, singleton
from pydantic import ValidationError
from pnode_analytics.constants import node_stats_cache_key
from pnode_analytics.models import NodeStats, PNodeDetails
from pnode_analytics.repositories import TieredCacheRepository

ENRICHED_FIELDS = ("ram_used", "ram_total", "cpu_percent")


@singleton
class StatsEnrichmentService:

    @inject
    def __init__(self, cache: TieredCacheRepository):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__cache = cache

    async def enrich(self, nodes: list[PNodeDetails]) -> list[PNodeDetails]:
        """Merge cached per-node stats into ``nodes``.

        Only fields the node does not already carry are filled in; fields
        derived from discovery are never overwritten.
        """
        if not nodes:
            return []
        cached_stats: list[Optional[Any]] = await asyncio.gather(
            *(self.__cache.get(node_stats_cache_key(node.pubkey)) for node in nodes)
        )
        enriched_nodes: list[PNodeDetails] = [self.merge(node, raw_stats) for node, raw_stats in zip(nodes, cached_stats)]
        enriched_count: int = sum(1 for raw_stats in cached_stats if raw_stats is not None)
        self.__logger.debug(f"Merged cached stats into {enriched_count}/{len(nodes)} nodes")
        return enriched_nodes

    @staticmethod
    def merge(node: PNodeDetails, raw_stats: Optional[Any]) -> PNodeDetails:
        if not isinstance(raw_stats, dict):
            return node
        try:
            stats: NodeStats = NodeStats.model_validate(raw_stats)
        except ValidationError:
            return node
        updates: dict[str, Any] = {}
        for field in ENRICHED_FIELDS:
            value = getattr(stats, field)
            if getattr(node, field) is None and value is not None:
                updates[field] = value
        return node.model_copy(update=updates) if updates else node
