"""Tests for geo resolution through the 24h geo cache."""

from http import HTTPStatus

import pytest

from pnode_analytics.constants import geo_cache_key
from pnode_analytics.exceptions import UpstreamException
from pnode_analytics.services.geo import GeoService

BERLIN = {"status": "success", "country": "Germany", "regionName": "Berlin", "city": "Berlin", "lat": 52.52, "lon": 13.40}


async def test_resolve_ip_looks_up_once_and_caches(config, cache, ip_api_client):
    ip_api_client.responses["8.8.4.4"] = BERLIN
    service = GeoService(config, cache, ip_api_client)

    first = await service.resolve_ip("8.8.4.4")
    second = await service.resolve_ip("8.8.4.4")

    assert first == second
    assert first.lng == 13.40
    assert first.region == "Berlin"
    assert ip_api_client.calls == ["8.8.4.4"]
    assert (await cache.get(geo_cache_key("8.8.4.4")))["country"] == "Germany"


async def test_failed_lookup_is_not_cached(config, cache, ip_api_client):
    ip_api_client.responses["10.0.0.9"] = {"status": "fail", "message": "private range"}
    service = GeoService(config, cache, ip_api_client)

    assert await service.resolve_ip("10.0.0.9") is None
    assert await cache.get(geo_cache_key("10.0.0.9")) is None


async def test_missing_coordinates_yield_none(config, cache, ip_api_client):
    ip_api_client.responses["1.1.1.1"] = {"status": "success", "country": "Australia", "lat": None, "lon": 1.0}
    service = GeoService(config, cache, ip_api_client)

    assert await service.resolve_ip("1.1.1.1") is None


async def test_upstream_error_yields_none(config, cache, ip_api_client):
    ip_api_client.responses["1.1.1.1"] = UpstreamException(HTTPStatus.BAD_GATEWAY, "timeout", "30502")
    service = GeoService(config, cache, ip_api_client)

    assert await service.resolve_ip("1.1.1.1") is None


async def test_region_defaults_to_unknown(config, cache, ip_api_client):
    ip_api_client.responses["9.9.9.9"] = {"status": "success", "country": "US", "lat": "37.7", "lon": "-122.4"}
    service = GeoService(config, cache, ip_api_client)

    geo = await service.resolve_ip("9.9.9.9")

    assert geo.region == "Unknown"
    assert geo.lat == 37.7
    assert geo.city is None


@pytest.mark.parametrize("address", [None, "", "not-an-ip:9001", "999.1.1.1:9001", "[::1]:9001"])
async def test_resolve_node_geo_rejects_invalid_addresses(config, cache, ip_api_client, address):
    service = GeoService(config, cache, ip_api_client)

    assert await service.resolve_node_geo(address) is None
    assert ip_api_client.calls == []


async def test_resolve_node_geo_strips_port(config, cache, ip_api_client):
    ip_api_client.responses["8.8.4.4"] = BERLIN
    service = GeoService(config, cache, ip_api_client)

    geo = await service.resolve_node_geo("8.8.4.4:9001")

    assert geo.country == "Germany"
