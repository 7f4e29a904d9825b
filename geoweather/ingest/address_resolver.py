"""Resolve free-text search queries to coordinates.

Coordinate strings short-circuit locally; anything else goes to the
Census one-line-address geocoder, and the first match wins.
"""

import logging
from typing import Any

from geoweather.config.schema import GeocoderConfig
from geoweather.errors import ErrorKind, ResolutionError, ValidationError
from geoweather.ingest.census_client import CensusGeocoderClient
from geoweather.ingest.coordinate_parser import classify_query
from geoweather.models.common import Coordinates
from geoweather.models.geocode import AddressMatch, Geography

NOT_FOUND_MESSAGE = "Address not found"


class AddressResolver:
    def __init__(
        self,
        client: CensusGeocoderClient,
        logger: logging.Logger | None = None,
    ):
        self.client = client
        self.log = logger or logging.getLogger(__name__)

    @classmethod
    def from_config(
        cls, config: GeocoderConfig, logger: logging.Logger | None = None
    ) -> "AddressResolver":
        client = CensusGeocoderClient(
            base_url=config.base_url,
            benchmark=config.benchmark,
            vintage=config.vintage,
            timeout=config.timeout,
            logger=logger,
        )
        return cls(client, logger=logger)

    async def resolve_location(self, text: str) -> Coordinates:
        """Turn an address or "lat, lon" string into coordinates.

        Raises ValidationError for blank input and ResolutionError when the
        geocoder has no usable match or the request fails.
        """
        if not text or not text.strip():
            raise ValidationError("Address is required")

        query = classify_query(text)
        if isinstance(query, Coordinates):
            self.log.info("Query parsed as coordinates: %s", query.as_query())
            return query

        self.log.info("Geocoding address: %s", query.text)
        raw = await self.client.geocode_address(query.text)
        # Only the first match counts; an unusable first match is not found
        coords = _match_coordinates(_first_match(raw))
        if coords is None:
            raise ResolutionError(NOT_FOUND_MESSAGE, kind=ErrorKind.NOT_FOUND)
        self.log.info("Address resolved to %s", coords.as_query())
        return coords

    async def find_matches(self, address: str) -> list[AddressMatch]:
        """Return every usable geocoder match for an address, in upstream order."""
        if not address or not address.strip():
            raise ValidationError("Address is required")
        return await self._geocode(address.strip())

    async def reverse_geocode(self, coords: Coordinates) -> list[Geography]:
        """List the Census geographies (state, county, ...) containing a point."""
        raw = await self.client.reverse_geocode(coords)
        return _extract_geographies(raw)

    async def _geocode(self, address: str) -> list[AddressMatch]:
        raw = await self.client.geocode_address(address)
        matches = _extract_matches(raw)
        self.log.debug("Geocoder returned %d usable matches", len(matches))
        return matches


def _address_matches(raw: Any) -> list[Any]:
    if not isinstance(raw, dict):
        return []
    result = raw.get("result")
    if not isinstance(result, dict):
        return []
    address_matches = result.get("addressMatches")
    return address_matches if isinstance(address_matches, list) else []


def _first_match(raw: Any) -> Any:
    matches = _address_matches(raw)
    return matches[0] if matches else None


def _extract_matches(raw: Any) -> list[AddressMatch]:
    matches: list[AddressMatch] = []
    for m in _address_matches(raw):
        coords = _match_coordinates(m)
        if coords is None:
            continue
        matches.append(
            AddressMatch(
                matched_address=m.get("matchedAddress", ""),
                coordinates=coords,
            )
        )
    return matches


def _match_coordinates(match: Any) -> Coordinates | None:
    """Read x (longitude) / y (latitude) from a match; None if unusable."""
    if not isinstance(match, dict):
        return None
    pair = match.get("coordinates")
    if not isinstance(pair, dict):
        return None
    try:
        return Coordinates(lat=float(pair["y"]), lon=float(pair["x"]))
    except (KeyError, TypeError, ValueError):
        return None


def _extract_geographies(raw: Any) -> list[Geography]:
    if not isinstance(raw, dict):
        return []
    result = raw.get("result") or {}
    geographies = result.get("geographies") if isinstance(result, dict) else None
    if not isinstance(geographies, dict):
        return []

    out: list[Geography] = []
    for layer, entries in geographies.items():
        if not isinstance(entries, list):
            continue
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            out.append(
                Geography(
                    layer=layer,
                    name=str(entry.get("NAME") or entry.get("BASENAME") or ""),
                    geoid=str(entry.get("GEOID", "")),
                )
            )
    return out


async def resolve_location(
    text: str,
    config: GeocoderConfig | None = None,
    logger: logging.Logger | None = None,
) -> Coordinates:
    """One-shot helper: build a resolver from config and resolve ``text``."""
    resolver = AddressResolver.from_config(config or GeocoderConfig(), logger)
    return await resolver.resolve_location(text)
