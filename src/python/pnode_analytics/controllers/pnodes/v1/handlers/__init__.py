from .get_map_nodes_handler import GetMapNodesHandler
from .get_pnode_handler import GetPNodeHandler
from .get_pnode_stats_handler import GetPNodeStatsHandler
from .list_pnodes_handler import ListPNodesHandler
from .refresh_pnodes_handler import RefreshPNodesHandler

__all__ = [
    "GetMapNodesHandler",
    "GetPNodeHandler",
    "GetPNodeStatsHandler",
    "ListPNodesHandler",
    "RefreshPNodesHandler"
]
