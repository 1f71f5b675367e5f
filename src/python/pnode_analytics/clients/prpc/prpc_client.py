import httpx
import logging
from time import time
from typing import Any, Optional
from prometheus_client import Counter, Histogram
from pnode_analytics.constants import PRPC_GET_PODS, PRPC_GET_PODS_WITH_STATS, PRPC_GET_STATS
from pnode_analytics.exceptions import PrpcException

PRPC_EXE_COUNTER = Counter("pna_prpc_exe_total", "Total number of pRPC calls executed", ["method"])
PRPC_EXE_DURATION_HISTOGRAM = Histogram("pna_prpc_exe_duration_seconds", "Duration of pRPC calls in seconds", ["method"])
PRPC_EXE_ERROR_COUNTER = Counter("pna_prpc_exe_error_total", "Total number of pRPC calls that resulted in error", ["method", "transient"])


class PrpcClient:
    """JSON-RPC 2.0 client for the pNode pRPC endpoint (``POST http://<ip>:<port>/rpc``).

    One ``httpx.AsyncClient`` is shared by every call; the timeout is given
    per call since gossip seeds and individual nodes use different budgets.
    Every failure surfaces as ``PrpcException``. Timeouts and connection
    failures are flagged ``transient``; a non-200 reply, a malformed body or
    a JSON-RPC error object are not.
    """

    def __init__(self, port: int = 6000, default_timeout: float = 10.0, http_client: Optional[httpx.AsyncClient] = None):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__port = port
        self.__http_client = http_client or httpx.AsyncClient(timeout=default_timeout)

    async def get_pods(self, ip: str, timeout: Optional[float] = None) -> dict:
        return await self.call(ip, PRPC_GET_PODS, timeout) or {}

    async def get_pods_with_stats(self, ip: str, timeout: Optional[float] = None) -> dict:
        return await self.call(ip, PRPC_GET_PODS_WITH_STATS, timeout) or {}

    async def get_stats(self, ip: str, timeout: Optional[float] = None) -> dict:
        return await self.call(ip, PRPC_GET_STATS, timeout) or {}

    async def call(self, ip: str, method: str, timeout: Optional[float] = None) -> Any:
        start_time: float = time()
        PRPC_EXE_COUNTER.labels(method=method).inc()
        url: str = f"http://{ip}:{self.__port}/rpc"
        payload: dict = {"jsonrpc": "2.0", "method": method, "id": 1}
        try:
            self.__logger.debug(f"[EXTERNAL] Full Request: <{url} | {payload}>")

            # Execute HTTP request
            try:
                response = await self.__http_client.post(
                    url,
                    json=payload,
                    timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT
                )
            except (httpx.TimeoutException, httpx.NetworkError) as e:
                raise self.__error(f"{method} to {ip} failed: {e.__class__.__name__}", True, ip, method) from e
            except httpx.HTTPError as e:
                raise self.__error(f"{method} to {ip} failed: {e}", False, ip, method) from e

            if response.status_code != 200:
                raise self.__error(f"{method} to {ip} returned HTTP {response.status_code}", False, ip, method)

            # Parse JSON-RPC envelope
            try:
                response_data = response.json()
            except ValueError as e:
                raise self.__error(f"{method} to {ip} returned a non-JSON body", False, ip, method) from e
            if not isinstance(response_data, dict):
                raise self.__error(f"{method} to {ip} returned an unexpected body", False, ip, method)
            if response_data.get("error"):
                raise self.__error(f"{method} to {ip} returned error: {response_data['error']}", False, ip, method)

            self.__logger.debug(f"[EXTERNAL] Full Response: <{url} | {method} ok>")
            return response_data.get("result")
        finally:
            duration: float = time() - start_time
            PRPC_EXE_DURATION_HISTOGRAM.labels(method=method).observe(duration)

    async def close(self) -> None:
        await self.__http_client.aclose()

    def __error(self, message: str, transient: bool, ip: str, method: str) -> PrpcException:
        PRPC_EXE_ERROR_COUNTER.labels(method=method, transient=str(transient).lower()).inc()
        return PrpcException(message, transient=transient, target=ip, method=method)
