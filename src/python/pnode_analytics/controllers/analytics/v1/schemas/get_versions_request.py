from pydantic import BaseModel

class GetVersionsRequest(BaseModel):
    pass
