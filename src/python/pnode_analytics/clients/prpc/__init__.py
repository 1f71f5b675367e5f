from .prpc_client import PrpcClient
from .raw_pod import RawPod

__all__ = [
    "PrpcClient",
    "RawPod"
]
