from pydantic import BaseModel
from pnode_analytics.models import NodeMetrics

class GetTopNodesResponse(BaseModel):
    top_nodes: list[NodeMetrics]
