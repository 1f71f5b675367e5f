import logging
from typing import Any, Iterable, Optional
from pydantic import ValidationError
from pnode_analytics.clients.prpc.raw_pod import RawPod
from pnode_analytics.constants import STATUS_OFFLINE, STATUS_ONLINE
from pnode_analytics.models import PNodeDetails

_logger = logging.getLogger("PNodeUtil")


class PNodeUtil:

    @staticmethod
    def normalize_pod(raw_pod: Any, now: float, online_threshold_seconds: float) -> Optional[PNodeDetails]:
        """Turn one raw gossip record into a ``PNodeDetails``.

        Returns ``None`` for a record without a usable identity. Never raises.
        """
        if not isinstance(raw_pod, dict):
            _logger.debug(f"Dropping non-object pod record: {raw_pod!r}")
            return None
        try:
            pod: RawPod = RawPod.model_validate(raw_pod)
        except ValidationError as e:
            _logger.debug(f"Dropping pod record without a valid pubkey: {e.error_count()} error(s)")
            return None

        try:
            return PNodeUtil.__to_details(pod, now, online_threshold_seconds)
        except Exception as e:
            _logger.warning(f"Dropping pod record {pod.pubkey}: {e.__class__.__name__}: {e}")
            return None

    @staticmethod
    def __to_details(pod: RawPod, now: float, online_threshold_seconds: float) -> PNodeDetails:
        ip, port = PNodeUtil.split_address(pod.address)
        return PNodeDetails(
            pubkey=pod.pubkey,
            address=pod.address,
            ip=ip,
            port=port,
            version=pod.version,
            status=PNodeUtil.derive_status(pod.last_seen_timestamp, now, online_threshold_seconds),
            last_seen=pod.last_seen_timestamp,
            uptime=pod.uptime,
            is_public=pod.is_public,
            rpc_port=pod.rpc_port,
            storage_used=pod.storage_used or 0,
            storage_capacity=pod.storage_committed or 0,
            storage_usage_percent=pod.storage_usage_percent
        )

    @staticmethod
    def derive_status(last_seen: Optional[float], now: float, online_threshold_seconds: float) -> str:
        # Strict: a node seen exactly threshold seconds ago is offline
        if last_seen is None:
            return STATUS_OFFLINE
        return STATUS_ONLINE if now - last_seen < online_threshold_seconds else STATUS_OFFLINE

    @staticmethod
    def with_current_status(nodes: Iterable[PNodeDetails], now: float, online_threshold_seconds: float) -> list[PNodeDetails]:
        return [
            node.model_copy(update={"status": PNodeUtil.derive_status(node.last_seen, now, online_threshold_seconds)})
            for node in nodes
        ]

    @staticmethod
    def dedupe_by_pubkey(nodes: Iterable[PNodeDetails]) -> list[PNodeDetails]:
        unique_nodes: dict[str, PNodeDetails] = {}
        for node in nodes:
            if node.pubkey not in unique_nodes:
                unique_nodes[node.pubkey] = node
        return list(unique_nodes.values())

    @staticmethod
    def split_address(address: Optional[str]) -> tuple[Optional[str], Optional[int]]:
        if not address:
            return None, None
        if address.startswith("["):
            host, _, rest = address[1:].partition("]")
            port_text = rest[1:] if rest.startswith(":") else ""
        elif address.count(":") == 1:
            host, _, port_text = address.partition(":")
        else:
            host, port_text = address, ""
        port: Optional[int] = int(port_text) if port_text.isascii() and port_text.isdigit() else None
        return (host or None), port

    @staticmethod
    def extract_ip(address: Optional[str]) -> Optional[str]:
        return PNodeUtil.split_address(address)[0]
