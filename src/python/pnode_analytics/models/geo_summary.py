from pydantic import BaseModel

class CountryCount(BaseModel):
    country: str
    count: int

class RegionCount(BaseModel):
    region: str
    count: int

class GeoSummary(BaseModel):
    countries: list[CountryCount]
    regions: list[RegionCount]
