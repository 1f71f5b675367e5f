from pydantic import BaseModel

class VersionDistribution(BaseModel):
    version: str
    count: int
    percentage: float
