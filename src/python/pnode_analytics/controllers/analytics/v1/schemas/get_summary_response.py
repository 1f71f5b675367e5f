from pydantic import BaseModel
from pnode_analytics.models import AnalyticsSummary

class GetSummaryResponse(BaseModel):
    summary: AnalyticsSummary
