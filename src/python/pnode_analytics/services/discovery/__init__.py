from .discovery_endpoint import DiscoveryEndpoint
from .gossip_discovery_service import GossipDiscoveryService

__all__ = [
    "DiscoveryEndpoint",
    "GossipDiscoveryService"
]
