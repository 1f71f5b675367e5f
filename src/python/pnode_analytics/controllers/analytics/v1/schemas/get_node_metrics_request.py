from pydantic import BaseModel

class GetNodeMetricsRequest(BaseModel):
    pass
