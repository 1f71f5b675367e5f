from pydantic import BaseModel

class GetTopNodesRequest(BaseModel):
    limit: int = 10
