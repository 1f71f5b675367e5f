SECONDS_PER_DAY = 86400


def _clamp(value: float, lower: float = 0.0, upper: float = 100.0) -> float:
    return max(lower, min(upper, value))


class MetricsUtil:
    """Derived per-node metrics. All percentages are on a 0-100 scale."""

    @staticmethod
    def calculate_uptime_24h(uptime_seconds: float | None) -> float:
        if not uptime_seconds or uptime_seconds <= 0:
            return 0.0
        return round(_clamp(uptime_seconds / SECONDS_PER_DAY * 100), 2)

    @staticmethod
    def calculate_utilization(used: float | None, total: float | None) -> float:
        if not total or total <= 0:
            return 0.0
        return round((used or 0) / total * 100, 2)

    @staticmethod
    def calculate_health_score(uptime_24h: float, storage_utilization: float, is_online: bool) -> float:
        # 50% uptime, 30% free storage headroom, 20% online
        headroom: float = 100 - _clamp(storage_utilization)
        score: float = uptime_24h * 0.5 + headroom * 0.3 + (100 if is_online else 0) * 0.2
        return round(_clamp(score), 2)

    @staticmethod
    def get_node_tier(health_score: float) -> str:
        if health_score >= 90:
            return "Excellent"
        if health_score >= 75:
            return "Good"
        return "Poor"
