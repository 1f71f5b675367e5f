from pydantic import BaseModel
from pnode_analytics.models import NodeMetrics

class GetNodeMetricsResponse(BaseModel):
    node_metrics: list[NodeMetrics]
