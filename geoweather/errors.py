"""Error taxonomy for location resolution and forecast retrieval."""

from enum import StrEnum


class ErrorKind(StrEnum):
    NOT_FOUND = "not_found"
    TRANSPORT = "transport"


class GeoWeatherError(Exception):
    """Base error. Carries the upstream HTTP status when one is known."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ValidationError(GeoWeatherError):
    """Raised for missing or empty input before any request is made."""

    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class ResolutionError(GeoWeatherError):
    """Raised when a query cannot be turned into coordinates."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.NOT_FOUND,
        status_code: int | None = None,
    ):
        super().__init__(message, status_code)
        self.kind = kind


class ForecastError(GeoWeatherError):
    """Raised when the points lookup or the forecast fetch fails."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.TRANSPORT,
        status_code: int | None = None,
    ):
        super().__init__(message, status_code)
        self.kind = kind


class LocatorError(GeoWeatherError):
    """Raised when the device position is unsupported, denied or unavailable."""
