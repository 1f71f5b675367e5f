from pydantic import BaseModel
from pnode_analytics.models import PNodeDetails

class ListPNodesResponse(BaseModel):
    pnodes: list[PNodeDetails]
    total_count: int
    online_count: int
