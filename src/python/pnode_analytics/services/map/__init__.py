from .map_service import MapService

__all__ = [
    "MapService"
]
