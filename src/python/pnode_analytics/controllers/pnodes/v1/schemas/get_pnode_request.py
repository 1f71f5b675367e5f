from typing import Optional
from pydantic import BaseModel

class GetPNodeRequest(BaseModel):
    pubkey: Optional[str] = None
