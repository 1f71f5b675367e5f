"""Shared fixtures: fake pRPC / geo clients, a fake remote cache tier and config factories."""

import time
from typing import Any, Optional

import pytest
import yaml

from pnode_analytics.clients.geo import IpApiClient
from pnode_analytics.clients.prpc import PrpcClient
from pnode_analytics.configs import AnalyticsConfig
from pnode_analytics.constants import PRPC_GET_STATS
from pnode_analytics.exceptions import CacheTierUnavailableException, PrpcException
from pnode_analytics.repositories import BaseCacheRepository, LocalCacheRepository, TieredCacheRepository


class FakePrpcClient(PrpcClient):
    """Answers ``call(ip, method)`` from a table of results or exceptions."""

    def __init__(self):  # no HTTP client
        self.responses: dict[tuple[str, str], Any] = {}
        self.calls: list[tuple[str, str, Optional[float]]] = []

    def respond(self, ip: str, method: str, result: Any) -> None:
        self.responses[(ip, method)] = result

    def fail(self, ip: str, method: str, transient: bool = True) -> None:
        self.responses[(ip, method)] = PrpcException(f"{method} failed", transient=transient, target=ip, method=method)

    async def call(self, ip: str, method: str, timeout: Optional[float] = None) -> Any:
        self.calls.append((ip, method, timeout))
        result = self.responses.get((ip, method))
        if result is None:
            raise PrpcException(f"{method} to {ip} timed out", transient=True, target=ip, method=method)
        if isinstance(result, Exception):
            raise result
        return result

    async def get_stats(self, ip: str, timeout: Optional[float] = None) -> dict:
        return await self.call(ip, PRPC_GET_STATS, timeout)

    async def close(self) -> None:
        pass


class FakeIpApiClient(IpApiClient):

    def __init__(self):  # no HTTP client
        self.responses: dict[str, Any] = {}
        self.calls: list[str] = []

    async def lookup(self, ip: str, timeout: Optional[float] = None) -> dict:
        self.calls.append(ip)
        result = self.responses.get(ip, {"status": "fail", "message": "reserved range"})
        if isinstance(result, Exception):
            raise result
        return result

    async def close(self) -> None:
        pass


class FakeRemoteTier(BaseCacheRepository):
    """Remote tier stand-in that can be switched between reachable and unreachable."""

    def __init__(self, clock=time.time):
        self.reachable = True
        self.store = LocalCacheRepository(clock=clock)
        self.operations: list[tuple[str, str]] = []

    @property
    def name(self) -> str:
        return "fake-remote"

    @property
    def is_available(self) -> bool:
        return True

    async def get(self, key: str) -> Optional[Any]:
        self.__check("get", key)
        return await self.store.get(key)

    async def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        self.__check("set", key)
        await self.store.set(key, value, ttl_seconds)

    async def delete(self, key: str) -> None:
        self.__check("delete", key)
        await self.store.delete(key)

    def __check(self, operation: str, key: str) -> None:
        self.operations.append((operation, key))
        if not self.reachable:
            raise CacheTierUnavailableException(self.name, "connection refused")


class FakeClock:

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def write_config(tmp_path, **sections) -> str:
    body: dict = {
        "pnode_analytics": {
            "prpc": {"seed_ips": ["10.0.0.1", "10.0.0.2", "10.0.0.3"]},
            "enrichment": {"enabled": False, "batch_delay_seconds": 0.0},
        }
    }
    for section, values in sections.items():
        body["pnode_analytics"].setdefault(section, {}).update(values)
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(body))
    return str(path)


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in ("PNODE_ANALYTICS_CONFIG", "REDIS_URL", "HOST", "PORT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_factory(tmp_path):
    def factory(**sections) -> AnalyticsConfig:
        return AnalyticsConfig(config_path=write_config(tmp_path, **sections))
    return factory


@pytest.fixture
def config(config_factory) -> AnalyticsConfig:
    return config_factory()


@pytest.fixture
def cache() -> TieredCacheRepository:
    return TieredCacheRepository([LocalCacheRepository()])


@pytest.fixture
def prpc_client() -> FakePrpcClient:
    return FakePrpcClient()


@pytest.fixture
def ip_api_client() -> FakeIpApiClient:
    return FakeIpApiClient()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_remote_tier_class():
    return FakeRemoteTier


@pytest.fixture
def raw_pod():
    def factory(pubkey: Any, address: Optional[str] = "10.1.0.1:9001", age_seconds: float = 10, **fields) -> dict:
        pod = {
            "pubkey": pubkey,
            "address": address,
            "version": "0.7.3",
            "last_seen_timestamp": int(time.time() - age_seconds),
            "uptime": 43200,
            "is_public": True,
            "rpc_port": 6000,
            "storage_committed": 1000,
            "storage_used": 250,
            "storage_usage_percent": 25.0,
        }
        pod.update(fields)
        return pod
    return factory
