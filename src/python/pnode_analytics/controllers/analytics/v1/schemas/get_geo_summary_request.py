from pydantic import BaseModel

class GetGeoSummaryRequest(BaseModel):
    pass
