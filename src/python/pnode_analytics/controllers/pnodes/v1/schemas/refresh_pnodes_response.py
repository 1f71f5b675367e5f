from typing import Optional
from pydantic import BaseModel

class RefreshPNodesResponse(BaseModel):
    total_count: int
    source: Optional[str] = None
