import logging
import re
from typing import Any, Optional
from injector import inject, singleton
from pydantic import ValidationError
from pnode_analytics.clients.geo import IpApiClient
from pnode_analytics.configs import AnalyticsConfig
from pnode_analytics.constants import GEO_CACHE_TTL, geo_cache_key
from pnode_analytics.exceptions import UpstreamException
from pnode_analytics.models import GeoLocation
from pnode_analytics.repositories import TieredCacheRepository
from pnode_analytics.utils import PNodeUtil

IPV4_PATTERN = re.compile(r"^(\d{1,3})\.(\d{1,3})\.(\d{1,3})\.(\d{1,3})$")


@singleton
class GeoService:
    """Resolves IPv4 addresses to locations, through the 24h geo cache.

    Every failure mode (invalid address, lookup error, ``status == fail``,
    missing coordinates) yields ``None``. Only successful lookups are cached.
    """

    @inject
    def __init__(self, config: AnalyticsConfig, cache: TieredCacheRepository, ip_api_client: IpApiClient):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__default_timeout_seconds = config.geo_timeout_seconds
        self.__cache = cache
        self.__ip_api_client = ip_api_client

    async def resolve_ip(self, ip: str, timeout_seconds: Optional[float] = None) -> Optional[GeoLocation]:
        if not self.is_valid_ipv4(ip):
            return None

        # Get cached location
        cached: Optional[Any] = await self.__cache.get(geo_cache_key(ip))
        if isinstance(cached, dict):
            try:
                return GeoLocation.model_validate(cached)
            except ValidationError:
                self.__logger.warning(f"Cached geo entry for {ip} is malformed, looking it up again")

        # Look up location
        try:
            data: dict = await self.__ip_api_client.lookup(ip, timeout_seconds or self.__default_timeout_seconds)
        except UpstreamException as e:
            self.__logger.debug(f"Geo lookup for {ip} failed: {e}")
            return None

        geo_location: Optional[GeoLocation] = self.__to_geo_location(data)
        if geo_location is None:
            self.__logger.debug(f"Geo lookup for {ip} returned no usable location: {data.get('message', '')}")
            return None

        await self.__cache.set(geo_cache_key(ip), geo_location.model_dump(mode="json"), GEO_CACHE_TTL)
        return geo_location

    async def resolve_node_geo(self, address: Optional[str], timeout_seconds: Optional[float] = None) -> Optional[GeoLocation]:
        ip: Optional[str] = PNodeUtil.extract_ip(address)
        if ip is None:
            return None
        return await self.resolve_ip(ip, timeout_seconds)

    @staticmethod
    def is_valid_ipv4(ip: Optional[str]) -> bool:
        if not ip:
            return False
        match = IPV4_PATTERN.match(ip.strip())
        return match is not None and all(int(octet) <= 255 for octet in match.groups())

    @staticmethod
    def __to_geo_location(data: dict) -> Optional[GeoLocation]:
        if data.get("status") == "fail":
            return None
        if not data.get("lat") or not data.get("lon") or not data.get("country"):
            return None
        try:
            return GeoLocation(
                lat=float(data["lat"]),
                lng=float(data["lon"]),
                country=data["country"],
                region=data.get("regionName") or "Unknown",
                city=data.get("city") or None
            )
        except (TypeError, ValueError):
            return None
