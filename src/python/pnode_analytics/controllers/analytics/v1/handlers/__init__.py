from .get_geo_summary_handler import GetGeoSummaryHandler
from .get_node_metrics_handler import GetNodeMetricsHandler
from .get_summary_handler import GetSummaryHandler
from .get_top_nodes_handler import GetTopNodesHandler
from .get_versions_handler import GetVersionsHandler

__all__ = [
    "GetGeoSummaryHandler",
    "GetNodeMetricsHandler",
    "GetSummaryHandler",
    "GetTopNodesHandler",
    "GetVersionsHandler"
]
