from pydantic import BaseModel

class GetSummaryRequest(BaseModel):
    pass
