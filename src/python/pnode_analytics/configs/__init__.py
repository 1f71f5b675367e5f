from .analytics_config import AnalyticsConfig

__all__ = [
    "AnalyticsConfig",
]
