import asyncio
import logging
from collections import Counter as CountingDict
from typing import Optional
from injector import inject, singleton
from pnode_analytics.configs import AnalyticsConfig
from pnode_analytics.models import (
    CountryCount,
    GeoLocation,
    GeoSummary,
    MapNode,
    NodeMetrics,
    PNodeDetails,
    RegionCount
)
from pnode_analytics.services.analytics import AnalyticsService
from pnode_analytics.services.geo import GeoService
from pnode_analytics.services.pnodes import PNodeCacheService

# Above this many nodes, geo lookups are issued in chunks instead of all at once
GEO_CHUNKING_THRESHOLD = 100
GEO_CHUNK_SIZE = 20


@singleton
class MapService:

    @inject
    def __init__(self,
                 config: AnalyticsConfig,
                 pnode_cache_service: PNodeCacheService,
                 analytics_service: AnalyticsService,
                 geo_service: GeoService):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__geo_timeout_seconds = config.geo_map_timeout_seconds
        self.__pnode_cache_service = pnode_cache_service
        self.__analytics_service = analytics_service
        self.__geo_service = geo_service

    async def get_map_nodes(self) -> list[MapNode]:
        """Every node with a resolvable location, joined with its health metrics.

        Nodes whose location cannot be resolved are left out.
        """
        nodes, metrics = await asyncio.gather(
            self.__pnode_cache_service.get_all_pnodes(),
            self.__analytics_service.get_node_metrics()
        )
        metrics_by_pubkey: dict[str, NodeMetrics] = {item.pubkey: item for item in metrics}

        chunk_size: int = GEO_CHUNK_SIZE if len(nodes) > GEO_CHUNKING_THRESHOLD else max(len(nodes), 1)
        map_nodes: list[MapNode] = []
        for offset in range(0, len(nodes), chunk_size):
            chunk: list[PNodeDetails] = nodes[offset:offset + chunk_size]
            outcomes = await asyncio.gather(
                *(self.__to_map_node(node, metrics_by_pubkey.get(node.pubkey)) for node in chunk),
                return_exceptions=True
            )
            for node, outcome in zip(chunk, outcomes):
                if isinstance(outcome, MapNode):
                    map_nodes.append(outcome)
                elif isinstance(outcome, Exception):
                    self.__logger.debug(f"Skipping node {node.pubkey} on map: {outcome}")

        self.__logger.info(f"Resolved {len(map_nodes)}/{len(nodes)} nodes for the map")
        return map_nodes

    async def get_geo_summary(self) -> GeoSummary:
        map_nodes: list[MapNode] = await self.get_map_nodes()
        country_counts: CountingDict = CountingDict(node.country for node in map_nodes)
        region_counts: CountingDict = CountingDict(node.region for node in map_nodes)
        return GeoSummary(
            countries=[CountryCount(country=country, count=count) for country, count in country_counts.most_common()],
            regions=[RegionCount(region=region, count=count) for region, count in region_counts.most_common()]
        )

    async def __to_map_node(self, node: PNodeDetails, metrics: Optional[NodeMetrics]) -> Optional[MapNode]:
        geo: Optional[GeoLocation] = await self.__geo_service.resolve_node_geo(node.address or node.ip, self.__geo_timeout_seconds)
        if geo is None:
            return None
        return MapNode(
            pubkey=node.pubkey,
            lat=geo.lat,
            lng=geo.lng,
            country=geo.country,
            region=geo.region,
            status=node.status,
            health_score=metrics.health_score if metrics else 0,
            uptime_24h=metrics.uptime_24h if metrics else 0,
            storage_utilization=metrics.storage_utilization if metrics else 0,
            version=node.version,
            last_seen=node.last_seen
        )
