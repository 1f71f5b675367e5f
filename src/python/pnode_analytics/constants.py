# Cache keys
PNODES_CACHE_KEY = "pnodes"
NODE_STATS_CACHE_KEY_PREFIX = "node_stats_"
RAW_PODS_CACHE_KEY = "pods_raw_analytics"
NODE_METRICS_CACHE_KEY = "node_metrics"
GEO_CACHE_KEY_PREFIX = "geo:"

# Cache TTL classes (seconds)
PNODES_CACHE_TTL = 30.0
NODE_STATS_CACHE_TTL = 120.0
ANALYTICS_CACHE_TTL = 60.0
GEO_CACHE_TTL = 24 * 60 * 60.0

# pRPC methods
PRPC_GET_PODS = "get-pods"
PRPC_GET_PODS_WITH_STATS = "get-pods-with-stats"
PRPC_GET_STATS = "get-stats"

# Node status values
STATUS_ONLINE = "online"
STATUS_OFFLINE = "offline"


def node_stats_cache_key(pubkey: str) -> str:
    return f"{NODE_STATS_CACHE_KEY_PREFIX}{pubkey}"


def geo_cache_key(ip: str) -> str:
    return f"{GEO_CACHE_KEY_PREFIX}{ip}"
