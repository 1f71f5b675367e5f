from pydantic import BaseModel
from pnode_analytics.models import MapNode

class GetMapNodesResponse(BaseModel):
    nodes: list[MapNode]
