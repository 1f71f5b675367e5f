from pydantic import BaseModel
from pnode_analytics.models import NodeStats

class GetPNodeStatsResponse(BaseModel):
    pubkey: str
    stats: NodeStats
