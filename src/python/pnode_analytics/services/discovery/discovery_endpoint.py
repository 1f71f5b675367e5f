from pydantic import BaseModel


class DiscoveryEndpoint(BaseModel):
    """One gossip entry point, and the pRPC methods tried against it in order."""
    seed_ip: str
    methods: tuple[str, ...]
    timeout_seconds: float
