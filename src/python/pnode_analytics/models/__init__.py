from .analytics_summary import AnalyticsSummary
from .cache_entry import CacheEntry
from .enrichment_run_result import EnrichmentRunResult
from .geo_location import GeoLocation
from .geo_summary import CountryCount, GeoSummary, RegionCount
from .map_node import MapNode
from .node_metrics import NodeMetrics
from .node_stats import NodeStats
from .pnode_details import PNodeDetails
from .version_distribution import VersionDistribution

__all__ = [
    "AnalyticsSummary",
    "CacheEntry",
    "CountryCount",
    "EnrichmentRunResult",
    "GeoLocation",
    "GeoSummary",
    "MapNode",
    "NodeMetrics",
    "NodeStats",
    "PNodeDetails",
    "RegionCount",
    "VersionDistribution"
]
