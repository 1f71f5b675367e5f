from typing import Optional
from pydantic import BaseModel, ConfigDict

class NodeStats(BaseModel):
    model_config = ConfigDict(extra="allow")

    cpu_percent: Optional[float] = None
    ram_used: Optional[int] = None
    ram_total: Optional[int] = None
    uptime: Optional[int] = None
    active_streams: Optional[int] = None
    packets_received: Optional[int] = None
    packets_sent: Optional[int] = None
    file_size: Optional[int] = None
    total_bytes: Optional[int] = None
    total_pages: Optional[int] = None
    current_index: Optional[int] = None
    last_updated: Optional[int] = None
