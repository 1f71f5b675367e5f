import logging
import os
import yaml
from pathlib import Path
from typing import Any, Optional
from injector import singleton

# From: src/python/pnode_analytics/configs/analytics_config.py
# To:   src/resources/configs/default.yaml
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[3] / "resources" / "configs" / "default.yaml"


@singleton
class AnalyticsConfig:

    def __init__(self, config_path: Optional[str] = None):
        self.__logger = logging.getLogger(self.__class__.__name__)

        # Resolve config file path (explicit argument, then env variable, then bundled default)
        explicit_path: Optional[str] = config_path or os.environ.get("PNODE_ANALYTICS_CONFIG")
        resolved_path: Path = Path(explicit_path) if explicit_path else DEFAULT_CONFIG_PATH

        raw_config: dict[str, Any] = {}
        if resolved_path.exists():
            with open(resolved_path, "r") as f:
                raw_config = yaml.safe_load(f) or {}
        elif explicit_path:
            raise FileNotFoundError(f"Config file not found at: {resolved_path}")
        else:
            self.__logger.warning(f"Config file not found at {resolved_path}, using built-in defaults")

        analytics_config: dict = raw_config.get("pnode_analytics", {}) or {}

        # Server settings
        server_config: dict = analytics_config.get("server", {}) or {}
        self.server_host: str = os.environ.get("HOST") or server_config.get("host", "0.0.0.0")
        self.server_port: int = int(os.environ.get("PORT") or server_config.get("port", 3000))
        self.log_level: str = (os.environ.get("LOG_LEVEL") or server_config.get("log_level", "INFO")).upper()

        # pRPC settings
        prpc_config: dict = analytics_config.get("prpc", {}) or {}
        self.prpc_seed_ips: list[str] = list(prpc_config.get("seed_ips", ["173.212.220.65"]))
        self.prpc_port: int = int(prpc_config.get("port", 6000))
        self.prpc_discovery_timeout_seconds: float = float(prpc_config.get("discovery_timeout_seconds", 10.0))
        self.prpc_fallback_timeout_seconds: float = float(prpc_config.get("fallback_timeout_seconds", 5.0))
        self.prpc_stats_timeout_seconds: float = float(prpc_config.get("stats_timeout_seconds", 8.0))

        # Node settings
        nodes_config: dict = analytics_config.get("nodes", {}) or {}
        self.online_threshold_seconds: float = float(nodes_config.get("online_threshold_seconds", 300))

        # Cache settings
        cache_config: dict = analytics_config.get("cache", {}) or {}
        self.cache_redis_url: str = os.environ.get("REDIS_URL") or cache_config.get("redis_url", "redis://localhost:6379/0")
        self.cache_connect_timeout_seconds: float = float(cache_config.get("connect_timeout_seconds", 2.0))
        self.cache_operation_timeout_seconds: float = float(cache_config.get("operation_timeout_seconds", 1.0))
        self.cache_retry_interval_seconds: float = float(cache_config.get("retry_interval_seconds", 30.0))
        self.cache_key_prefix: str = cache_config.get("key_prefix", "pnode-analytics:")

        # Enrichment settings
        enrichment_config: dict = analytics_config.get("enrichment", {}) or {}
        self.enrichment_enabled: bool = enrichment_config.get("enabled", True)
        self.enrichment_interval_seconds: float = float(enrichment_config.get("interval_seconds", 90.0))
        self.enrichment_batch_size: int = int(enrichment_config.get("batch_size", 15))
        self.enrichment_batch_delay_seconds: float = float(enrichment_config.get("batch_delay_seconds", 0.1))
        self.enrichment_fetch_timeout_seconds: float = float(enrichment_config.get("fetch_timeout_seconds", 5.0))

        # Geo settings
        geo_config: dict = analytics_config.get("geo", {}) or {}
        self.geo_base_url: str = geo_config.get("base_url", "http://ip-api.com/json")
        self.geo_timeout_seconds: float = float(geo_config.get("timeout_seconds", 5.0))
        self.geo_map_timeout_seconds: float = float(geo_config.get("map_timeout_seconds", 2.0))

        if self.enrichment_batch_size < 1:
            raise ValueError(f"enrichment.batch_size must be positive, got {self.enrichment_batch_size}")
        if not self.prpc_seed_ips:
            raise ValueError("prpc.seed_ips must contain at least one seed address")

        self.__logger.info(f"AnalyticsConfig loaded from {resolved_path if resolved_path.exists() else 'defaults'}")

    @property
    def primary_seed_ip(self) -> str:
        return self.prpc_seed_ips[0]

    @property
    def fallback_seed_ips(self) -> list[str]:
        return self.prpc_seed_ips[1:]
