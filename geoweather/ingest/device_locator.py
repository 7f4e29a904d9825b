"""Single-shot device geolocation over a pluggable host provider."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol

from geoweather.config.schema import DeviceConfig
from geoweather.errors import LocatorError
from geoweather.models.common import Coordinates, utc_now

UNSUPPORTED_MESSAGE = "Geolocation not supported"
UNAVAILABLE_PREFIX = "Permission denied or location unavailable: "


@dataclass(frozen=True)
class PositionOptions:
    high_accuracy: bool = True
    timeout_ms: int = 10_000
    max_age_ms: int = 300_000


@dataclass(frozen=True)
class Position:
    coordinates: Coordinates
    timestamp: datetime


class GeolocationProvider(Protocol):
    async def get_current_position(self, options: PositionOptions) -> Position:
        """Return one position fix or raise LocatorError."""
        ...


class FixedPositionProvider:
    """Host capability backed by a configured position.

    With no position configured every request is denied.
    """

    def __init__(self, coordinates: Coordinates | None):
        self.coordinates = coordinates

    async def get_current_position(self, options: PositionOptions) -> Position:
        if self.coordinates is None:
            raise LocatorError("no position configured for this device")
        return Position(coordinates=self.coordinates, timestamp=utc_now())


class DeviceLocator:
    def __init__(
        self,
        provider: GeolocationProvider | None,
        options: PositionOptions | None = None,
        logger: logging.Logger | None = None,
    ):
        self.provider = provider
        self.options = options or PositionOptions()
        self.log = logger or logging.getLogger(__name__)

    @classmethod
    def from_config(
        cls, config: DeviceConfig, logger: logging.Logger | None = None
    ) -> "DeviceLocator":
        coords = None
        if config.latitude is not None and config.longitude is not None:
            coords = Coordinates(lat=config.latitude, lon=config.longitude)
        options = PositionOptions(
            high_accuracy=config.high_accuracy,
            timeout_ms=config.timeout_ms,
            max_age_ms=config.max_age_ms,
        )
        return cls(FixedPositionProvider(coords), options, logger)

    async def get_device_coordinates(self) -> Coordinates:
        """Request one position fix from the provider.

        Raises LocatorError when there is no provider, the request is
        denied, it times out, or the fix is older than ``max_age_ms``.
        """
        self.log.info("Requesting device geolocation")
        if self.provider is None:
            self.log.warning("Geolocation not supported on this host")
            raise LocatorError(UNSUPPORTED_MESSAGE)

        try:
            position = await asyncio.wait_for(
                self.provider.get_current_position(self.options),
                timeout=self.options.timeout_ms / 1000,
            )
        except TimeoutError as e:
            self.log.error("Geolocation timed out after %dms", self.options.timeout_ms)
            raise LocatorError(UNAVAILABLE_PREFIX + "timeout expired") from e
        except LocatorError as e:
            self.log.error("Geolocation error: %s", e.message)
            raise LocatorError(UNAVAILABLE_PREFIX + e.message) from e
        except Exception as e:
            self.log.exception("Geolocation provider failed")
            raise LocatorError(UNAVAILABLE_PREFIX + str(e)) from e

        age = utc_now() - position.timestamp
        if age > timedelta(milliseconds=self.options.max_age_ms):
            self.log.error("Geolocation fix is stale (%.0fs old)", age.total_seconds())
            raise LocatorError(UNAVAILABLE_PREFIX + "cached position too old")

        self.log.info("Device coordinates obtained: %s", position.coordinates.as_query())
        return position.coordinates


async def get_device_coordinates(
    config: DeviceConfig | None = None,
    logger: logging.Logger | None = None,
) -> Coordinates:
    """One-shot helper: build a locator from config and request a fix."""
    locator = DeviceLocator.from_config(config or DeviceConfig(), logger)
    return await locator.get_device_coordinates()
