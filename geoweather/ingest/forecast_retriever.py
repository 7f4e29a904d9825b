"""Forecast retriever: coordinates -> grid point -> forecast periods."""

import logging
from typing import Any

from geoweather.config.schema import WeatherConfig
from geoweather.errors import ErrorKind, ForecastError
from geoweather.ingest.nws_client import NwsClient
from geoweather.models.common import Coordinates
from geoweather.models.forecast import ForecastPeriod

DEFAULT_MAX_PERIODS = 14


class ForecastRetriever:
    """Two sequential NWS calls with fail-fast semantics.

    The forecast call is never issued when the points lookup fails or
    carries no forecast URL. Nothing is cached between calls.
    """

    def __init__(
        self,
        nws_client: NwsClient,
        max_periods: int = DEFAULT_MAX_PERIODS,
        logger: logging.Logger | None = None,
    ):
        self.nws = nws_client
        self.max_periods = max_periods
        self.log = logger or logging.getLogger(__name__)

    @classmethod
    def from_config(
        cls, config: WeatherConfig, logger: logging.Logger | None = None
    ) -> "ForecastRetriever":
        client = NwsClient(
            base_url=config.base_url,
            user_agent=config.user_agent,
            timeout=config.timeout,
            logger=logger,
        )
        return cls(client, max_periods=config.max_periods, logger=logger)

    async def fetch_forecast(self, coords: Coordinates) -> list[ForecastPeriod]:
        """Fetch up to ``max_periods`` forecast periods for a location."""
        self.log.info("Fetching forecast for %s", coords.as_query())
        forecast_url = await self._resolve_forecast_url(coords)
        raw_periods = await self._fetch_periods(forecast_url)

        periods = [ForecastPeriod.from_api(p) for p in raw_periods[: self.max_periods]]
        self.log.info(
            "Forecast loaded: %d of %d periods", len(periods), len(raw_periods)
        )
        return periods

    async def _resolve_forecast_url(self, coords: Coordinates) -> str:
        try:
            point = await self.nws.get_point(coords)
        except ForecastError as e:
            raise ForecastError(
                f"Failed to fetch forecast URL: {e.message}",
                kind=e.kind,
                status_code=e.status_code,
            ) from e

        forecast_url = _properties(point).get("forecast")
        if not forecast_url or not isinstance(forecast_url, str):
            self.log.warning("Points response for %s has no forecast URL", coords.as_query())
            raise ForecastError("Forecast URL not found", kind=ErrorKind.NOT_FOUND)
        return forecast_url

    async def _fetch_periods(self, forecast_url: str) -> list[dict[str, Any]]:
        try:
            data = await self.nws.get_forecast(forecast_url)
        except ForecastError as e:
            raise ForecastError(
                f"Failed to fetch forecast data: {e.message}",
                kind=e.kind,
                status_code=e.status_code,
            ) from e

        periods = _properties(data).get("periods")
        if not isinstance(periods, list):
            return []
        return [p for p in periods if isinstance(p, dict)]


def _properties(doc: Any) -> dict[str, Any]:
    if not isinstance(doc, dict):
        return {}
    props = doc.get("properties")
    return props if isinstance(props, dict) else {}


async def fetch_forecast(
    coords: Coordinates,
    config: WeatherConfig | None = None,
    logger: logging.Logger | None = None,
) -> list[ForecastPeriod]:
    """One-shot helper: build a retriever from config and fetch a forecast."""
    retriever = ForecastRetriever.from_config(config or WeatherConfig(), logger)
    return await retriever.fetch_forecast(coords)
