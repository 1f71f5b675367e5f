import logging
from time import time
from typing import Any, Optional
from injector import inject, singleton
from prometheus_client import Counter
from pnode_analytics.clients.prpc import PrpcClient
from pnode_analytics.configs import AnalyticsConfig
from pnode_analytics.constants import PRPC_GET_PODS, PRPC_GET_PODS_WITH_STATS
from pnode_analytics.exceptions import PrpcException
from pnode_analytics.models import PNodeDetails
from pnode_analytics.services.discovery.discovery_endpoint import DiscoveryEndpoint
from pnode_analytics.utils import PNodeUtil

DISCOVERY_COUNTER = Counter("pna_discovery_total", "Total number of discovery calls by the endpoint that served them", ["source"])
DISCOVERY_DROPPED_RECORDS_COUNTER = Counter("pna_discovery_dropped_records_total", "Total number of raw pod records dropped during normalization")


@singleton
class GossipDiscoveryService:
    """Obtains the current node set from the gossip layer.

    Endpoints are tried in the order given by ``endpoints``: the primary
    seed first (rich listing with stats, then the basic listing), then
    every fallback seed with the basic listing and a shorter timeout. The
    first endpoint that yields at least one usable node wins. Exhausting
    every endpoint is not an error: the result is simply empty.
    """

    @inject
    def __init__(self, config: AnalyticsConfig, prpc_client: PrpcClient):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__prpc_client = prpc_client
        self.__online_threshold_seconds = config.online_threshold_seconds
        self.__endpoints: tuple[DiscoveryEndpoint, ...] = self.__build_endpoints(config)

    @property
    def endpoints(self) -> tuple[DiscoveryEndpoint, ...]:
        return self.__endpoints

    async def discover(self) -> list[PNodeDetails]:
        nodes, _ = await self.discover_with_source()
        return nodes

    async def discover_with_source(self) -> tuple[list[PNodeDetails], Optional[str]]:
        """Discover the node set and report the seed IP that served it, ``None`` if nothing was found."""
        for endpoint in self.__endpoints:
            # Fetch raw pod records from this endpoint
            raw_pods: Optional[list[Any]] = await self.__fetch_raw_pods(endpoint)
            if raw_pods is None:
                continue

            # Normalize records, dropping those without a usable identity
            now: float = time()
            nodes: list[PNodeDetails] = [
                node for node in (PNodeUtil.normalize_pod(raw_pod, now, self.__online_threshold_seconds) for raw_pod in raw_pods)
                if node is not None
            ]
            dropped: int = len(raw_pods) - len(nodes)
            if dropped:
                DISCOVERY_DROPPED_RECORDS_COUNTER.inc(dropped)
                self.__logger.info(f"Dropped {dropped} malformed pod record(s) from {endpoint.seed_ip}")
            if not nodes:
                self.__logger.warning(f"Seed {endpoint.seed_ip} returned no usable nodes, trying next endpoint")
                continue

            # Deduplicate by pubkey, first occurrence wins
            unique_nodes: list[PNodeDetails] = PNodeUtil.dedupe_by_pubkey(nodes)
            online_count: int = sum(1 for node in unique_nodes if node.status == "online")
            self.__logger.info(
                f"Discovered {len(unique_nodes)} unique nodes from {endpoint.seed_ip} "
                f"({online_count} online, {len(nodes) - len(unique_nodes)} duplicates removed)"
            )
            DISCOVERY_COUNTER.labels(source=endpoint.seed_ip).inc()
            return unique_nodes, endpoint.seed_ip

        self.__logger.error("All discovery endpoints exhausted, returning an empty node set")
        DISCOVERY_COUNTER.labels(source="none").inc()
        return [], None

    async def __fetch_raw_pods(self, endpoint: DiscoveryEndpoint) -> Optional[list[Any]]:
        for method in endpoint.methods:
            try:
                result = await self.__list_pods(endpoint.seed_ip, method, endpoint.timeout_seconds)
            except PrpcException as e:
                if e.transient:
                    self.__logger.debug(f"Discovery via {method} on {endpoint.seed_ip} failed: {e}")
                else:
                    self.__logger.warning(f"Discovery via {method} on {endpoint.seed_ip} failed: {e}")
                continue
            pods = result.get("pods") if isinstance(result, dict) else None
            if not isinstance(pods, list):
                self.__logger.warning(f"Discovery via {method} on {endpoint.seed_ip} returned no pod list")
                continue
            return pods
        return None

    async def __list_pods(self, seed_ip: str, method: str, timeout_seconds: float) -> dict:
        if method == PRPC_GET_PODS_WITH_STATS:
            return await self.__prpc_client.get_pods_with_stats(seed_ip, timeout_seconds)
        return await self.__prpc_client.get_pods(seed_ip, timeout_seconds)

    @staticmethod
    def __build_endpoints(config: AnalyticsConfig) -> tuple[DiscoveryEndpoint, ...]:
        endpoints: list[DiscoveryEndpoint] = [
            DiscoveryEndpoint(
                seed_ip=config.primary_seed_ip,
                methods=(PRPC_GET_PODS_WITH_STATS, PRPC_GET_PODS),
                timeout_seconds=config.prpc_discovery_timeout_seconds
            )
        ]
        for seed_ip in config.fallback_seed_ips:
            endpoints.append(DiscoveryEndpoint(
                seed_ip=seed_ip,
                methods=(PRPC_GET_PODS,),
                timeout_seconds=config.prpc_fallback_timeout_seconds
            ))
        return tuple(endpoints)
