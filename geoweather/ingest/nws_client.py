"""NOAA/NWS API client for grid point lookup and forecast retrieval."""

import logging
from typing import Any

import httpx

from geoweather.config.schema import DEFAULT_USER_AGENT, NWS_BASE_URL
from geoweather.errors import ErrorKind, ForecastError
from geoweather.models.common import Coordinates


class NwsClient:
    def __init__(
        self,
        base_url: str = NWS_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        http: httpx.AsyncClient | None = None,
        logger: logging.Logger | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self.http = http
        self.log = logger or logging.getLogger(__name__)

    @property
    def headers(self) -> dict[str, str]:
        # api.weather.gov rejects requests without an identifying User-Agent
        return {"User-Agent": self.user_agent, "Accept": "application/geo+json"}

    async def get_point(self, coords: Coordinates) -> dict[str, Any]:
        """Resolve the grid point metadata for a coordinate pair."""
        return await self._get(f"{self.base_url}/points/{coords.as_query()}")

    async def get_forecast(self, forecast_url: str) -> dict[str, Any]:
        """Fetch the forecast document at a URL returned by ``get_point``."""
        return await self._get(forecast_url)

    async def _get(self, url: str) -> dict[str, Any]:
        try:
            if self.http is not None:
                resp = await self.http.get(
                    url, headers=self.headers, timeout=self.timeout, follow_redirects=True
                )
            else:
                async with httpx.AsyncClient(
                    timeout=self.timeout, follow_redirects=True
                ) as client:
                    resp = await client.get(url, headers=self.headers)
        except httpx.RequestError as e:
            self.log.error("NWS request failed: %s -> %s", url, e)
            raise ForecastError(
                f"Request failed: {e}", kind=ErrorKind.TRANSPORT
            ) from e

        self.log.debug("NWS %s returned %d", url, resp.status_code)
        if not resp.is_success:
            self.log.error(
                "NWS %d %s for %s", resp.status_code, resp.reason_phrase, url
            )
            raise ForecastError(
                f"HTTP {resp.status_code}: {resp.reason_phrase}",
                kind=ErrorKind.TRANSPORT,
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as e:
            self.log.error("NWS returned malformed JSON from %s: %s", url, e)
            raise ForecastError(
                f"Malformed response body: {e}", kind=ErrorKind.TRANSPORT
            ) from e
