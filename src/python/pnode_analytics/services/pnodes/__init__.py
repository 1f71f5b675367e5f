from .node_stats_service import NodeStatsService
from .pnode_cache_service import PNodeCacheService
from .stats_enrichment_service import StatsEnrichmentService

__all__ = [
    "NodeStatsService",
    "PNodeCacheService",
    "StatsEnrichmentService"
]
