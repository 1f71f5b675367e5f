from typing import Literal, Optional
from pydantic import BaseModel

class PNodeDetails(BaseModel):
    pubkey: str
    address: Optional[str] = None
    ip: Optional[str] = None
    port: Optional[int] = None
    version: Optional[str] = None
    status: Literal["online", "offline"] = "offline"
    last_seen: Optional[int] = None
    uptime: Optional[int] = None
    is_public: Optional[bool] = None
    rpc_port: Optional[int] = None
    storage_used: int = 0
    storage_capacity: int = 0
    storage_usage_percent: Optional[float] = None
    # Populated asynchronously by stats enrichment
    ram_used: Optional[int] = None
    ram_total: Optional[int] = None
    cpu_percent: Optional[float] = None
