from pydantic import BaseModel
from pnode_analytics.models import PNodeDetails

class GetPNodeResponse(BaseModel):
    pnode: PNodeDetails
