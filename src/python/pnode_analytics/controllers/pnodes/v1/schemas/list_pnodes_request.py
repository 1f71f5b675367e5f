from pydantic import BaseModel

class ListPNodesRequest(BaseModel):
    pass
