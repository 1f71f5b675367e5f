from typing import Literal, Optional
from pydantic import BaseModel

class MapNode(BaseModel):
    pubkey: str
    lat: float
    lng: float
    country: str
    region: str
    status: Literal["online", "offline"]
    health_score: float = 0
    uptime_24h: float = 0
    storage_utilization: float = 0
    version: Optional[str] = None
    last_seen: Optional[int] = None
