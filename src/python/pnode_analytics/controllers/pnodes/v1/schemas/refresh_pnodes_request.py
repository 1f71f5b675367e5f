from pydantic import BaseModel

class RefreshPNodesRequest(BaseModel):
    pass
