from pydantic import BaseModel

class AnalyticsSummary(BaseModel):
    total_nodes: int
    online_nodes: int
    offline_nodes: int
    total_storage_capacity: int
    total_storage_used: int
    storage_utilization: float
    average_uptime_24h: float
    average_health_score: float
