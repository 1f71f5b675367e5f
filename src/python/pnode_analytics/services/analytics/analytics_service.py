import logging
from collections import Counter as CountingDict
from time import time
from typing import Any, Optional
from injector import inject, singleton
from pydantic import ValidationError
from pnode_analytics.clients.prpc import PrpcClient
from pnode_analytics.configs import AnalyticsConfig
from pnode_analytics.constants import (
    ANALYTICS_CACHE_TTL,
    NODE_METRICS_CACHE_KEY,
    PRPC_GET_PODS,
    PRPC_GET_PODS_WITH_STATS,
    RAW_PODS_CACHE_KEY,
    STATUS_ONLINE
)
from pnode_analytics.exceptions import PrpcException
from pnode_analytics.models import AnalyticsSummary, NodeMetrics, PNodeDetails, VersionDistribution
from pnode_analytics.repositories import TieredCacheRepository
from pnode_analytics.services.pnodes import PNodeCacheService
from pnode_analytics.utils import MetricsUtil, PNodeUtil

UNKNOWN_VERSION = "unknown"


@singleton
class AnalyticsService:

    @inject
    def __init__(self,
                 config: AnalyticsConfig,
                 cache: TieredCacheRepository,
                 prpc_client: PrpcClient,
                 pnode_cache_service: PNodeCacheService):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__seed_ip = config.primary_seed_ip
        self.__discovery_timeout_seconds = config.prpc_discovery_timeout_seconds
        self.__online_threshold_seconds = config.online_threshold_seconds
        self.__cache = cache
        self.__prpc_client = prpc_client
        self.__pnode_cache_service = pnode_cache_service

    async def get_raw_pods(self) -> list[dict]:
        """Raw pod records from the primary seed, cached under the analytics snapshot key.

        A total failure returns an empty list and is not cached.
        """
        cached: Optional[Any] = await self.__cache.get(RAW_PODS_CACHE_KEY)
        if isinstance(cached, list):
            return cached

        listings = (
            (PRPC_GET_PODS_WITH_STATS, self.__prpc_client.get_pods_with_stats),
            (PRPC_GET_PODS, self.__prpc_client.get_pods)
        )
        for method, list_pods in listings:
            try:
                result = await list_pods(self.__seed_ip, self.__discovery_timeout_seconds)
            except PrpcException as e:
                self.__logger.debug(f"Analytics snapshot via {method} failed: {e}")
                continue
            pods = result.get("pods") if isinstance(result, dict) else None
            if isinstance(pods, list):
                await self.__cache.set(RAW_PODS_CACHE_KEY, pods, ANALYTICS_CACHE_TTL)
                return pods

        self.__logger.warning("Analytics snapshot unavailable from every method")
        return []

    async def get_node_metrics(self) -> list[NodeMetrics]:
        cached: Optional[Any] = await self.__cache.get(NODE_METRICS_CACHE_KEY)
        if isinstance(cached, list):
            try:
                return [NodeMetrics.model_validate(item) for item in cached]
            except ValidationError:
                self.__logger.warning("Cached node metrics are malformed, recomputing")

        nodes: list[PNodeDetails] = await self.__pnode_cache_service.get_all_pnodes()
        metrics: list[NodeMetrics] = [self.compute_node_metrics(node) for node in nodes]
        await self.__cache.set(
            NODE_METRICS_CACHE_KEY,
            [item.model_dump(mode="json") for item in metrics],
            ANALYTICS_CACHE_TTL
        )
        return metrics

    async def get_summary(self) -> AnalyticsSummary:
        nodes: list[PNodeDetails] = await self.__pnode_cache_service.get_all_pnodes()
        metrics: list[NodeMetrics] = await self.get_node_metrics()

        online_nodes: int = sum(1 for node in nodes if node.status == STATUS_ONLINE)
        total_storage_capacity: int = sum(node.storage_capacity for node in nodes)
        total_storage_used: int = sum(node.storage_used for node in nodes)
        return AnalyticsSummary(
            total_nodes=len(nodes),
            online_nodes=online_nodes,
            offline_nodes=len(nodes) - online_nodes,
            total_storage_capacity=total_storage_capacity,
            total_storage_used=total_storage_used,
            storage_utilization=MetricsUtil.calculate_utilization(total_storage_used, total_storage_capacity),
            average_uptime_24h=self.__average([item.uptime_24h for item in metrics]),
            average_health_score=self.__average([item.health_score for item in metrics])
        )

    async def get_version_distribution(self) -> list[VersionDistribution]:
        # Versions are counted over the raw snapshot, one vote per pubkey
        raw_pods: list[dict] = await self.get_raw_pods()
        now: float = time()
        nodes: list[PNodeDetails] = PNodeUtil.dedupe_by_pubkey(
            node for node in (PNodeUtil.normalize_pod(raw_pod, now, self.__online_threshold_seconds) for raw_pod in raw_pods)
            if node is not None
        )
        if not nodes:
            return []

        counts: CountingDict = CountingDict(node.version or UNKNOWN_VERSION for node in nodes)
        distribution: list[VersionDistribution] = [
            VersionDistribution(version=version, count=count, percentage=round(count / len(nodes) * 100, 2))
            for version, count in counts.items()
        ]
        distribution.sort(key=lambda item: (-item.count, item.version))
        return distribution

    async def get_top_nodes(self, limit: int = 10) -> list[NodeMetrics]:
        metrics: list[NodeMetrics] = await self.get_node_metrics()
        ranked: list[NodeMetrics] = sorted(metrics, key=lambda item: (-item.health_score, -item.uptime_24h, item.pubkey))
        return ranked[:limit]

    @staticmethod
    def compute_node_metrics(node: PNodeDetails) -> NodeMetrics:
        uptime_24h: float = MetricsUtil.calculate_uptime_24h(node.uptime)
        storage_utilization: float = MetricsUtil.calculate_utilization(node.storage_used, node.storage_capacity)
        health_score: float = MetricsUtil.calculate_health_score(uptime_24h, storage_utilization, node.status == STATUS_ONLINE)
        return NodeMetrics(
            pubkey=node.pubkey,
            status=node.status,
            uptime_24h=uptime_24h,
            storage_utilization=storage_utilization,
            health_score=health_score,
            tier=MetricsUtil.get_node_tier(health_score)
        )

    @staticmethod
    def __average(values: list[float]) -> float:
        if not values:
            return 0.0
        return round(sum(values) / len(values), 2)
