from .geo_service import GeoService

__all__ = [
    "GeoService"
]
