from http import HTTPStatus
from typing import Optional
from pnode_analytics.exceptions.upstream_exception import UpstreamException

class PrpcException(UpstreamException):
    """Raised when a pRPC call to a gossip seed or to a single pNode fails.

    ``transient`` marks the expected failure modes of a fleet of volunteer
    nodes (timeouts, refused or unreachable connections). Callers treat a
    transient failure as "no data" and log it at low severity.
    """

    def __init__(self, message: str, transient: bool, target: str, method: str, diagnostic_details: Optional[dict[str, str]] = None):
        super().__init__(
            http_status=HTTPStatus.BAD_GATEWAY,
            message=message,
            diagnostic_code="20502" if transient else "20500",
            diagnostic_details={"target": target, "method": method, **(diagnostic_details or {})}
        )
        self.transient = transient
        self.target = target
        self.method = method
