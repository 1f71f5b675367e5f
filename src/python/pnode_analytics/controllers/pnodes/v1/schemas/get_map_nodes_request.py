from pydantic import BaseModel

class GetMapNodesRequest(BaseModel):
    pass
