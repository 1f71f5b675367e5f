"""Tests for the HTTP routes, wired through the real injector with fake clients."""

import pytest
from fastapi.testclient import TestClient

from pnode_analytics.__main__ import build_app
from pnode_analytics.constants import PRPC_GET_PODS_WITH_STATS, PRPC_GET_STATS


@pytest.fixture
def http(config, cache, prpc_client, ip_api_client, raw_pod):
    prpc_client.respond("10.0.0.1", PRPC_GET_PODS_WITH_STATS, {"pods": [
        raw_pod("ON", address="8.8.8.8:9001"),
        raw_pod("OFF", address="8.8.4.4:9001", age_seconds=3600),
    ]})
    prpc_client.respond("8.8.8.8", PRPC_GET_STATS, {"cpu_percent": 1.5, "ram_used": 10, "ram_total": 20})
    ip_api_client.responses["8.8.8.8"] = {"status": "success", "country": "US", "regionName": "Virginia", "lat": 38.9, "lon": -77.0}
    app = build_app(config, cache=cache, prpc_client=prpc_client, ip_api_client=ip_api_client)
    return TestClient(app)


def test_list_pnodes(http):
    response = http.post("/v1/pnodes:list")

    assert response.status_code == 200
    body = response.json()
    assert body["total_count"] == 2
    assert body["online_count"] == 1
    assert [pnode["pubkey"] for pnode in body["pnodes"]] == ["ON", "OFF"]


def test_get_pnode(http):
    response = http.post("/v1/pnodes:get", json={"pubkey": "ON"})

    assert response.status_code == 200
    assert response.json()["pnode"]["ip"] == "8.8.8.8"


def test_get_pnode_not_found_is_404(http):
    response = http.post("/v1/pnodes:get", json={"pubkey": "nobody"})

    assert response.status_code == 404
    assert response.json()["diagnostic_code"] == "00404"


def test_get_pnode_requires_pubkey(http):
    response = http.post("/v1/pnodes:get", json={})

    assert response.status_code == 400
    assert response.json()["diagnostic_code"] == "00400"


def test_malformed_body_is_400(http):
    response = http.post("/v1/pnodes:get", content=b"{not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400


def test_get_stats_for_online_and_offline_nodes(http):
    online = http.post("/v1/pnodes:get-stats", json={"pubkey": "ON"})
    offline = http.post("/v1/pnodes:get-stats", json={"pubkey": "OFF"})

    assert online.status_code == 200
    assert online.json()["stats"]["ram_total"] == 20
    assert offline.status_code == 404


def test_unexpected_errors_are_500_without_leaking_details(config, cache, prpc_client, ip_api_client):
    prpc_client.respond("10.0.0.1", PRPC_GET_PODS_WITH_STATS, RuntimeError("secret upstream detail"))
    http = TestClient(build_app(config, cache=cache, prpc_client=prpc_client, ip_api_client=ip_api_client))

    response = http.post("/v1/pnodes:list")

    assert response.status_code == 500
    assert response.json()["diagnostic_code"] == "10500"
    assert "secret" not in response.text


def test_map_degrades_to_empty_list(config, cache, prpc_client, ip_api_client):
    prpc_client.respond("10.0.0.1", PRPC_GET_PODS_WITH_STATS, RuntimeError("boom"))
    http = TestClient(build_app(config, cache=cache, prpc_client=prpc_client, ip_api_client=ip_api_client))

    response = http.post("/v1/pnodes:map")

    assert response.status_code == 200
    assert response.json() == {"nodes": []}


def test_map_and_geo_summary(http):
    map_response = http.post("/v1/pnodes:map")
    summary_response = http.post("/v1/analytics:geo-summary")

    assert [node["pubkey"] for node in map_response.json()["nodes"]] == ["ON"]
    assert summary_response.json()["geo_summary"]["countries"] == [{"country": "US", "count": 1}]


def test_refresh_reports_source(http):
    response = http.post("/v1/pnodes:refresh")

    assert response.status_code == 200
    assert response.json() == {"total_count": 2, "source": "10.0.0.1"}


def test_analytics_routes(http):
    summary = http.post("/v1/analytics:summary").json()["summary"]
    metrics = http.post("/v1/analytics:node-metrics").json()["node_metrics"]
    versions = http.post("/v1/analytics:versions").json()["versions"]
    top_nodes = http.post("/v1/analytics:top-nodes", json={"limit": 1}).json()["top_nodes"]

    assert summary["total_nodes"] == 2
    assert {item["pubkey"] for item in metrics} == {"ON", "OFF"}
    assert versions == [{"version": "0.7.3", "count": 2, "percentage": 100.0}]
    assert [item["pubkey"] for item in top_nodes] == ["ON"]


def test_top_nodes_limit_is_validated(http):
    response = http.post("/v1/analytics:top-nodes", json={"limit": 0})

    assert response.status_code == 400


def test_metrics_endpoint_exposes_request_counters(http):
    http.post("/v1/pnodes:list")

    response = http.get("/metrics/")

    assert response.status_code == 200
    assert "pna_api_exe_total" in response.text
