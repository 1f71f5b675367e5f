"""Tests for gossip discovery: endpoint order, fallbacks and deduplication."""

import asyncio
from typing import Any, Optional

import httpx
import pytest

from pnode_analytics.clients.prpc import PrpcClient
from pnode_analytics.constants import PRPC_GET_PODS, PRPC_GET_PODS_WITH_STATS
from pnode_analytics.services.discovery import GossipDiscoveryService


def test_endpoints_follow_seed_order(config, prpc_client):
    service = GossipDiscoveryService(config, prpc_client)

    endpoints = service.endpoints

    assert [endpoint.seed_ip for endpoint in endpoints] == ["10.0.0.1", "10.0.0.2", "10.0.0.3"]
    assert endpoints[0].methods == (PRPC_GET_PODS_WITH_STATS, PRPC_GET_PODS)
    assert endpoints[0].timeout_seconds == 10.0
    assert endpoints[1].methods == (PRPC_GET_PODS,)
    assert endpoints[1].timeout_seconds == 5.0


async def test_scenario_a_duplicate_identity_keeps_first_seen_address(config, prpc_client, raw_pod):
    prpc_client.respond("10.0.0.1", PRPC_GET_PODS_WITH_STATS, {"pods": [
        raw_pod("X", address="1.1.1.1:9001"),
        raw_pod("Y", address="2.2.2.2:9001"),
        raw_pod("X", address="3.3.3.3:9001"),
    ], "total_count": 3})
    service = GossipDiscoveryService(config, prpc_client)

    nodes, source = await service.discover_with_source()

    assert [node.pubkey for node in nodes] == ["X", "Y"]
    assert nodes[0].address == "1.1.1.1:9001"
    assert source == "10.0.0.1"


async def test_primary_falls_back_to_basic_listing(config, prpc_client, raw_pod):
    prpc_client.fail("10.0.0.1", PRPC_GET_PODS_WITH_STATS, transient=False)
    prpc_client.respond("10.0.0.1", PRPC_GET_PODS, {"pods": [raw_pod("A")]})
    service = GossipDiscoveryService(config, prpc_client)

    nodes = await service.discover()

    assert [node.pubkey for node in nodes] == ["A"]
    assert [call[:2] for call in prpc_client.calls] == [
        ("10.0.0.1", PRPC_GET_PODS_WITH_STATS),
        ("10.0.0.1", PRPC_GET_PODS),
    ]


async def test_scenario_b_primary_timeout_served_by_first_fallback(config, prpc_client, raw_pod):
    # Primary has no configured answers, so every call to it times out
    prpc_client.respond("10.0.0.2", PRPC_GET_PODS, {"pods": [raw_pod(f"N{i}") for i in range(5)]})
    prpc_client.respond("10.0.0.3", PRPC_GET_PODS, {"pods": [raw_pod("OTHER")]})
    service = GossipDiscoveryService(config, prpc_client)

    nodes, source = await service.discover_with_source()

    assert [node.pubkey for node in nodes] == ["N0", "N1", "N2", "N3", "N4"]
    assert source == "10.0.0.2"
    assert ("10.0.0.2", PRPC_GET_PODS, 5.0) in prpc_client.calls
    assert all(call[0] != "10.0.0.3" for call in prpc_client.calls)


async def test_endpoint_with_only_malformed_records_is_skipped(config, prpc_client, raw_pod):
    prpc_client.respond("10.0.0.1", PRPC_GET_PODS_WITH_STATS, {"pods": [{"address": "1.1.1.1:1"}, {"pubkey": ""}]})
    prpc_client.respond("10.0.0.2", PRPC_GET_PODS, {"pods": [raw_pod("B"), {"pubkey": None}]})
    service = GossipDiscoveryService(config, prpc_client)

    nodes, source = await service.discover_with_source()

    assert [node.pubkey for node in nodes] == ["B"]
    assert source == "10.0.0.2"


async def test_total_failure_returns_empty_list(config, prpc_client):
    prpc_client.respond("10.0.0.2", PRPC_GET_PODS, {"unexpected": True})
    service = GossipDiscoveryService(config, prpc_client)

    nodes, source = await service.discover_with_source()

    assert nodes == []
    assert source is None
    assert len(prpc_client.calls) == 4


async def test_discovered_status_reflects_last_seen(config, prpc_client, raw_pod):
    prpc_client.respond("10.0.0.1", PRPC_GET_PODS_WITH_STATS, {"pods": [
        raw_pod("fresh", age_seconds=10),
        raw_pod("stale", age_seconds=3600),
    ]})
    service = GossipDiscoveryService(config, prpc_client)

    nodes = await service.discover()

    assert {node.pubkey: node.status for node in nodes} == {"fresh": "online", "stale": "offline"}


@pytest.mark.parametrize("hostile", [
    {"uptime": float("inf")},
    {"storage_used": float("-inf")},
    {"last_seen_timestamp": float("nan")},
    {"last_seen_timestamp": 10 ** 400},
    {"rpc_port": "1e999"},
    {"storage_usage_percent": float("nan")},
    {"address": "1.2.3.4:²"},
    {"address": "[::1]:٣٠"},
])
async def test_hostile_optional_fields_do_not_abort_the_batch(config, prpc_client, raw_pod, hostile):
    prpc_client.respond("10.0.0.1", PRPC_GET_PODS_WITH_STATS, {"pods": [
        raw_pod("A"),
        {**raw_pod("H"), **hostile},
        raw_pod("B"),
    ]})
    service = GossipDiscoveryService(config, prpc_client)

    nodes, source = await service.discover_with_source()

    assert [node.pubkey for node in nodes] == ["A", "H", "B"]
    assert source == "10.0.0.1"


async def test_non_finite_json_from_seed_is_tolerated(config):
    body = (
        '{"jsonrpc": "2.0", "id": 1, "result": {"pods": ['
        '{"pubkey": "A", "address": "1.1.1.1:9001"}, '
        '{"pubkey": "B", "uptime": Infinity, "storage_usage_percent": NaN}'
        ']}}'
    )

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=body.encode(), headers={"content-type": "application/json"})

    client = PrpcClient(port=6000, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    service = GossipDiscoveryService(config, client)

    nodes = await service.discover()
    await client.close()

    assert [node.pubkey for node in nodes] == ["A", "B"]
    assert nodes[1].uptime is None
    assert nodes[1].storage_usage_percent is None


class GatedPrpcClient(PrpcClient):
    """Primary seed answers only the first listing call, and only once released."""

    def __init__(self, pods: list[dict]):  # no HTTP client
        self.pods = pods
        self.release = asyncio.Event()
        self.primary_calls = 0

    async def call(self, ip: str, method: str, timeout: Optional[float] = None) -> Any:
        if ip == "10.0.0.1":
            self.primary_calls += 1
            if self.primary_calls == 1:
                await self.release.wait()
                return {"pods": self.pods}
            return None
        return {"pods": self.pods}

    async def close(self) -> None:
        pass


async def test_concurrent_discoveries_report_their_own_source(config, raw_pod):
    client = GatedPrpcClient([raw_pod("A")])
    service = GossipDiscoveryService(config, client)

    first = asyncio.create_task(service.discover_with_source())
    while client.primary_calls == 0:
        await asyncio.sleep(0)
    second = await service.discover_with_source()
    client.release.set()
    first_result = await first

    assert first_result[1] == "10.0.0.1"
    assert second[1] == "10.0.0.2"
