from pydantic import BaseModel
from pnode_analytics.models import VersionDistribution

class GetVersionsResponse(BaseModel):
    versions: list[VersionDistribution]
