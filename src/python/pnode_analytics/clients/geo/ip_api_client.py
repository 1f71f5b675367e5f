import httpx
import logging
from http import HTTPStatus
from time import time
from typing import Optional
from prometheus_client import Counter, Histogram
from pnode_analytics.exceptions import UpstreamException

GEO_EXE_COUNTER = Counter("pna_geo_exe_total", "Total number of geo lookups executed", ["result"])
GEO_EXE_DURATION_HISTOGRAM = Histogram("pna_geo_exe_duration_seconds", "Duration of geo lookups in seconds")

GEO_FIELDS = "status,message,country,regionName,city,lat,lon"


class IpApiClient:
    """Client for the ip-api.com JSON endpoint (``GET <base_url>/<ip>?fields=...``)."""

    def __init__(self, base_url: str = "http://ip-api.com/json", default_timeout: float = 5.0, http_client: Optional[httpx.AsyncClient] = None):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__base_url = base_url.rstrip("/")
        self.__http_client = http_client or httpx.AsyncClient(timeout=default_timeout)

    async def lookup(self, ip: str, timeout: Optional[float] = None) -> dict:
        start_time: float = time()
        try:
            try:
                response = await self.__http_client.get(
                    f"{self.__base_url}/{ip}",
                    params={"fields": GEO_FIELDS},
                    timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT
                )
            except httpx.HTTPError as e:
                GEO_EXE_COUNTER.labels(result="error").inc()
                raise UpstreamException(
                    http_status=HTTPStatus.BAD_GATEWAY,
                    message=f"Geo lookup for {ip} failed: {e.__class__.__name__}",
                    diagnostic_code="30502",
                    diagnostic_details={"ip": ip}
                ) from e

            if response.status_code != 200:
                GEO_EXE_COUNTER.labels(result="error").inc()
                raise UpstreamException(
                    http_status=HTTPStatus.BAD_GATEWAY,
                    message=f"Geo lookup for {ip} returned HTTP {response.status_code}",
                    diagnostic_code="30500",
                    diagnostic_details={"ip": ip}
                )

            try:
                response_data = response.json()
            except ValueError as e:
                GEO_EXE_COUNTER.labels(result="error").inc()
                raise UpstreamException(
                    http_status=HTTPStatus.BAD_GATEWAY,
                    message=f"Geo lookup for {ip} returned a non-JSON body",
                    diagnostic_code="30500",
                    diagnostic_details={"ip": ip}
                ) from e

            GEO_EXE_COUNTER.labels(result="ok").inc()
            return response_data if isinstance(response_data, dict) else {}
        finally:
            GEO_EXE_DURATION_HISTOGRAM.observe(time() - start_time)

    async def close(self) -> None:
        await self.__http_client.aclose()
