"""Location types shared across the resolver, retriever and locator."""

from dataclasses import dataclass
from datetime import UTC, datetime

LAT_RANGE = (-90.0, 90.0)
LON_RANGE = (-180.0, 180.0)


def in_range(lat: float, lon: float) -> bool:
    return (
        LAT_RANGE[0] <= lat <= LAT_RANGE[1]
        and LON_RANGE[0] <= lon <= LON_RANGE[1]
    )


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not in_range(self.lat, self.lon):
            raise ValueError(
                f"Coordinates out of range: lat={self.lat}, lon={self.lon}"
            )

    def as_query(self) -> str:
        """Render as the ``lat,lon`` path segment used by the NWS API.

        api.weather.gov redirects anything finer than 4 decimal places.
        """
        return f"{self.lat:.4f},{self.lon:.4f}"

    def to_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lon": self.lon}


@dataclass(frozen=True)
class AddressQuery:
    text: str


def utc_now() -> datetime:
    return datetime.now(UTC)
