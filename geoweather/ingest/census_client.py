"""US Census geocoder client: one-line address lookup and reverse geocoding."""

import logging
from typing import Any

import httpx

from geoweather.config.schema import CENSUS_BASE_URL
from geoweather.errors import ErrorKind, ResolutionError
from geoweather.models.common import Coordinates

DEFAULT_BENCHMARK = "Public_AR_Current"
DEFAULT_VINTAGE = "Current_Current"


class CensusGeocoderClient:
    """Async wrapper around the Census geocoder REST endpoints.

    A shared ``httpx.AsyncClient`` may be injected; otherwise each request
    opens and closes its own client.
    """

    def __init__(
        self,
        base_url: str = CENSUS_BASE_URL,
        benchmark: str = DEFAULT_BENCHMARK,
        vintage: str = DEFAULT_VINTAGE,
        timeout: float = 30.0,
        http: httpx.AsyncClient | None = None,
        logger: logging.Logger | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.benchmark = benchmark
        self.vintage = vintage
        self.timeout = timeout
        self.http = http
        self.log = logger or logging.getLogger(__name__)

    async def geocode_address(self, address: str) -> dict[str, Any]:
        """Look up a free-text address. Returns the raw JSON body."""
        url = f"{self.base_url}/geocoder/locations/onelineaddress"
        params = {
            "address": address,
            "benchmark": self.benchmark,
            "format": "json",
        }
        return await self._get(url, params)

    async def reverse_geocode(self, coords: Coordinates) -> dict[str, Any]:
        """Look up the geographies containing a point. Returns the raw JSON body."""
        url = f"{self.base_url}/geocoder/geographies/coordinates"
        params = {
            "x": coords.lon,
            "y": coords.lat,
            "benchmark": self.benchmark,
            "vintage": self.vintage,
            "format": "json",
        }
        return await self._get(url, params)

    async def _get(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        try:
            if self.http is not None:
                resp = await self.http.get(
                    url, params=params, timeout=self.timeout, follow_redirects=True
                )
            else:
                async with httpx.AsyncClient(
                    timeout=self.timeout, follow_redirects=True
                ) as client:
                    resp = await client.get(url, params=params)
        except httpx.RequestError as e:
            self.log.error("Census geocoder request failed: %s -> %s", url, e)
            raise ResolutionError(
                f"Request failed: {e}", kind=ErrorKind.TRANSPORT
            ) from e

        self.log.debug("Census geocoder %s returned %d", url, resp.status_code)
        if not resp.is_success:
            self.log.error(
                "Census geocoder %d %s for %s",
                resp.status_code, resp.reason_phrase, url,
            )
            raise ResolutionError(
                f"HTTP error! status: {resp.status_code}",
                kind=ErrorKind.TRANSPORT,
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as e:
            self.log.error("Census geocoder returned malformed JSON: %s", e)
            raise ResolutionError(
                f"Malformed response body: {e}", kind=ErrorKind.TRANSPORT
            ) from e
