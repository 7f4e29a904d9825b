"""Census geocoder result models."""

from dataclasses import dataclass

from geoweather.models.common import Coordinates


@dataclass(frozen=True)
class AddressMatch:
    matched_address: str
    coordinates: Coordinates


@dataclass(frozen=True)
class Geography:
    layer: str  # e.g. "States", "Counties"
    name: str
    geoid: str
