from .ip_api_client import IpApiClient

__all__ = [
    "IpApiClient"
]
