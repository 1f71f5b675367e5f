from .get_map_nodes_request import GetMapNodesRequest
from .get_map_nodes_response import GetMapNodesResponse
from .get_pnode_request import GetPNodeRequest
from .get_pnode_response import GetPNodeResponse
from .get_pnode_stats_request import GetPNodeStatsRequest
from .get_pnode_stats_response import GetPNodeStatsResponse
from .list_pnodes_request import ListPNodesRequest
from .list_pnodes_response import ListPNodesResponse
from .refresh_pnodes_request import RefreshPNodesRequest
from .refresh_pnodes_response import RefreshPNodesResponse

__all__ = [
    "GetMapNodesRequest",
    "GetMapNodesResponse",
    "GetPNodeRequest",
    "GetPNodeResponse",
    "GetPNodeStatsRequest",
    "GetPNodeStatsResponse",
    "ListPNodesRequest",
    "ListPNodesResponse",
    "RefreshPNodesRequest",
    "RefreshPNodesResponse"
]
