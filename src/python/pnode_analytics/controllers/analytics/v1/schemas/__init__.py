from .get_geo_summary_request import GetGeoSummaryRequest
from .get_geo_summary_response import GetGeoSummaryResponse
from .get_node_metrics_request import GetNodeMetricsRequest
from .get_node_metrics_response import GetNodeMetricsResponse
from .get_summary_request import GetSummaryRequest
from .get_summary_response import GetSummaryResponse
from .get_top_nodes_request import GetTopNodesRequest
from .get_top_nodes_response import GetTopNodesResponse
from .get_versions_request import GetVersionsRequest
from .get_versions_response import GetVersionsResponse

__all__ = [
    "GetGeoSummaryRequest",
    "GetGeoSummaryResponse",
    "GetNodeMetricsRequest",
    "GetNodeMetricsResponse",
    "GetSummaryRequest",
    "GetSummaryResponse",
    "GetTopNodesRequest",
    "GetTopNodesResponse",
    "GetVersionsRequest",
    "GetVersionsResponse"
]
