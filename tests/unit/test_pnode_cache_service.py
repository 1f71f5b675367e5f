"""Tests for the node set cache, its enrichment merge and explicit refresh."""

from pnode_analytics.constants import PNODES_CACHE_KEY, PRPC_GET_PODS_WITH_STATS, node_stats_cache_key
from pnode_analytics.services.discovery import GossipDiscoveryService
from pnode_analytics.services.pnodes import PNodeCacheService, StatsEnrichmentService


def build_service(config, cache, prpc_client) -> PNodeCacheService:
    return PNodeCacheService(
        config,
        cache,
        GossipDiscoveryService(config, prpc_client),
        StatsEnrichmentService(cache)
    )


async def test_miss_discovers_and_caches(config, cache, prpc_client, raw_pod):
    prpc_client.respond("10.0.0.1", PRPC_GET_PODS_WITH_STATS, {"pods": [raw_pod("A"), raw_pod("B")]})
    service = build_service(config, cache, prpc_client)

    nodes = await service.get_all_pnodes()

    assert [node.pubkey for node in nodes] == ["A", "B"]
    cached = await cache.get(PNODES_CACHE_KEY)
    assert [item["pubkey"] for item in cached] == ["A", "B"]


async def test_hit_does_not_rediscover(config, cache, prpc_client, raw_pod):
    prpc_client.respond("10.0.0.1", PRPC_GET_PODS_WITH_STATS, {"pods": [raw_pod("A")]})
    service = build_service(config, cache, prpc_client)

    await service.get_all_pnodes()
    await service.get_all_pnodes()

    assert len(prpc_client.calls) == 1


async def test_hit_merges_fresh_stats_without_overwriting(config, cache, prpc_client, raw_pod):
    prpc_client.respond("10.0.0.1", PRPC_GET_PODS_WITH_STATS, {"pods": [raw_pod("A"), raw_pod("B")]})
    service = build_service(config, cache, prpc_client)
    await service.get_all_pnodes()

    await cache.set(node_stats_cache_key("A"), {"ram_used": 512, "ram_total": 2048, "cpu_percent": 12.5, "uptime": 1}, 120)
    nodes = await service.get_all_pnodes()

    by_pubkey = {node.pubkey: node for node in nodes}
    assert by_pubkey["A"].ram_used == 512
    assert by_pubkey["A"].ram_total == 2048
    assert by_pubkey["A"].cpu_percent == 12.5
    assert by_pubkey["A"].uptime == 43200
    assert by_pubkey["B"].ram_used is None


async def test_empty_discovery_is_cached(config, cache, prpc_client):
    service = build_service(config, cache, prpc_client)

    assert await service.get_all_pnodes() == []
    calls_after_first = len(prpc_client.calls)
    assert await service.get_all_pnodes() == []

    assert len(prpc_client.calls) == calls_after_first
    assert await cache.get(PNODES_CACHE_KEY) == []


async def test_get_pnode_is_consistent_with_listing(config, cache, prpc_client, raw_pod):
    prpc_client.respond("10.0.0.1", PRPC_GET_PODS_WITH_STATS, {"pods": [raw_pod("A", address="9.9.9.9:1")]})
    service = build_service(config, cache, prpc_client)

    node = await service.get_pnode("A")

    assert node is not None
    assert node.address == "9.9.9.9:1"
    assert await service.get_pnode("missing") is None


async def test_status_is_rederived_on_cache_hit(config, cache, prpc_client, raw_pod):
    prpc_client.respond("10.0.0.1", PRPC_GET_PODS_WITH_STATS, {"pods": [raw_pod("A")]})
    service = build_service(config, cache, prpc_client)
    [node] = await service.get_all_pnodes()
    assert node.status == "online"

    stale = node.model_dump(mode="json")
    stale["last_seen"] = stale["last_seen"] - 1000
    await cache.set(PNODES_CACHE_KEY, [stale], 30)

    [node] = await service.get_all_pnodes()
    assert node.status == "offline"


async def test_refresh_invalidates_and_rediscovers(config, cache, prpc_client, raw_pod):
    prpc_client.respond("10.0.0.1", PRPC_GET_PODS_WITH_STATS, {"pods": [raw_pod("A")]})
    service = build_service(config, cache, prpc_client)
    await service.get_all_pnodes()

    prpc_client.respond("10.0.0.1", PRPC_GET_PODS_WITH_STATS, {"pods": [raw_pod("A"), raw_pod("C")]})
    nodes, source = await service.refresh()

    assert [node.pubkey for node in nodes] == ["A", "C"]
    assert source == "10.0.0.1"
    assert len(prpc_client.calls) == 2
