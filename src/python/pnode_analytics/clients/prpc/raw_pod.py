import math
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, field_validator

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1


class RawPod(BaseModel):
    """A single pod record as returned by ``get-pods`` / ``get-pods-with-stats``.

    Only ``pubkey`` is required. Any other field carrying a value of the
    wrong shape is dropped to ``None`` so that one bad attribute does not
    cost the whole record.
    """
    model_config = ConfigDict(extra="ignore")

    pubkey: str
    address: Optional[str] = None
    version: Optional[str] = None
    last_seen_timestamp: Optional[int] = None
    uptime: Optional[int] = None
    is_public: Optional[bool] = None
    rpc_port: Optional[int] = None
    storage_committed: Optional[int] = None
    storage_used: Optional[int] = None
    storage_usage_percent: Optional[float] = None

    @field_validator("pubkey")
    @classmethod
    def _validate_pubkey(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("pubkey must not be empty")
        return value

    @field_validator("address", "version", mode="before")
    @classmethod
    def _lenient_str(cls, value: Any) -> Optional[str]:
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    @field_validator("last_seen_timestamp", "uptime", "rpc_port", "storage_committed", "storage_used", mode="before")
    @classmethod
    def _lenient_int(cls, value: Any) -> Optional[int]:
        if value is None or isinstance(value, bool):
            return None
        try:
            number = int(value)
        except (TypeError, ValueError, OverflowError):
            return None
        return number if _INT64_MIN <= number <= _INT64_MAX else None

    @field_validator("storage_usage_percent", mode="before")
    @classmethod
    def _lenient_float(cls, value: Any) -> Optional[float]:
        if value is None or isinstance(value, bool):
            return None
        try:
            number = float(value)
        except (TypeError, ValueError, OverflowError):
            return None
        return number if math.isfinite(number) else None

    @field_validator("is_public", mode="before")
    @classmethod
    def _lenient_bool(cls, value: Any) -> Optional[bool]:
        return value if isinstance(value, bool) else None
