from pydantic import BaseModel
from pnode_analytics.models import GeoSummary

class GetGeoSummaryResponse(BaseModel):
    geo_summary: GeoSummary
