from typing import Optional
from pydantic import BaseModel

class GetPNodeStatsRequest(BaseModel):
    pubkey: Optional[str] = None
