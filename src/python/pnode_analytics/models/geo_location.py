from typing import Optional
from pydantic import BaseModel

class GeoLocation(BaseModel):
    lat: float
    lng: float
    country: str
    region: str
    city: Optional[str] = None
