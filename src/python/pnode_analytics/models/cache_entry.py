from typing import Any
from pydantic import BaseModel

class CacheEntry(BaseModel):
    key: str
    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at
