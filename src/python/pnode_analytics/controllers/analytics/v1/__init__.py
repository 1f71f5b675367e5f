from .analytics_controller import router

__all__ = [
    "router"
]
