import logging
from typing import Any, Optional
from injector import inject, singleton
from pydantic import ValidationError
from pnode_analytics.clients.prpc import PrpcClient
from pnode_analytics.configs import AnalyticsConfig
from pnode_analytics.constants import NODE_STATS_CACHE_TTL, STATUS_ONLINE, node_stats_cache_key
from pnode_analytics.exceptions import PrpcException
from pnode_analytics.models import NodeStats, PNodeDetails
from pnode_analytics.repositories import TieredCacheRepository
from pnode_analytics.services.pnodes.pnode_cache_service import PNodeCacheService


@singleton
class NodeStatsService:

    @inject
    def __init__(self,
                 config: AnalyticsConfig,
                 cache: TieredCacheRepository,
                 prpc_client: PrpcClient,
                 pnode_cache_service: PNodeCacheService):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__stats_timeout_seconds = config.prpc_stats_timeout_seconds
        self.__cache = cache
        self.__prpc_client = prpc_client
        self.__pnode_cache_service = pnode_cache_service

    async def get_node_stats(self, pubkey: str) -> Optional[NodeStats]:
        # Get cached stats
        cached: Optional[Any] = await self.__cache.get(node_stats_cache_key(pubkey))
        if isinstance(cached, dict):
            try:
                return NodeStats.model_validate(cached)
            except ValidationError:
                self.__logger.warning(f"Cached stats for node {pubkey} are malformed, refetching")

        # Get node details
        node: Optional[PNodeDetails] = await self.__pnode_cache_service.get_pnode(pubkey)
        if node is None:
            return None

        # Offline nodes are never queried
        if node.status != STATUS_ONLINE:
            self.__logger.debug(f"Node {pubkey} is offline, skipping stats fetch")
            return None

        return await self.fetch_and_cache(node, self.__stats_timeout_seconds)

    async def fetch_and_cache(self, node: PNodeDetails, timeout_seconds: float) -> Optional[NodeStats]:
        """Query ``node`` directly for its stats and write them to the per-node stats key.

        Returns ``None`` when the node cannot be reached or replies with
        something unusable. Never raises.
        """
        if not node.ip:
            self.__logger.debug(f"Node {node.pubkey} has no address, skipping stats fetch")
            return None
        try:
            raw_stats: dict = await self.__prpc_client.get_stats(node.ip, timeout_seconds)
            stats: NodeStats = NodeStats.model_validate(raw_stats)
        except PrpcException as e:
            if e.transient:
                self.__logger.debug(f"Stats fetch for node {node.pubkey} at {node.ip} failed: {e}")
            else:
                self.__logger.warning(f"Stats fetch for node {node.pubkey} at {node.ip} failed: {e}")
            return None
        except ValidationError as e:
            self.__logger.warning(f"Node {node.pubkey} at {node.ip} returned malformed stats: {e.error_count()} error(s)")
            return None
        except Exception:
            self.__logger.error(f"Unexpected error fetching stats for node {node.pubkey}", exc_info=True)
            return None

        await self.__cache.set(node_stats_cache_key(node.pubkey), stats.model_dump(mode="json", exclude_none=True), NODE_STATS_CACHE_TTL)
        return stats
