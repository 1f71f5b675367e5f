from typing import Literal
from pydantic import BaseModel

class NodeMetrics(BaseModel):
    pubkey: str
    status: Literal["online", "offline"]
    uptime_24h: float
    storage_utilization: float
    health_score: float
    tier: Literal["Excellent", "Good", "Poor"]
