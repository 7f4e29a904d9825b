"""Detect and parse free-text "lat, lon" queries."""

import re

from geoweather.models.common import AddressQuery, Coordinates, in_range

_NUM_PAT = r"-?\d+\.?\d*"

# Two numbers separated by any run of commas and/or whitespace, nothing else
COORDINATE_RE = re.compile(rf"^{_NUM_PAT}[,\s]+{_NUM_PAT}$")

_SEPARATOR_RE = re.compile(r"[,\s]+")


def try_parse_coordinates(text: str) -> Coordinates | None:
    """Parse ``text`` as a coordinate pair.

    Returns None if the text is not two numbers or either value is out of
    range.
    """
    cleaned = text.strip()
    if not COORDINATE_RE.match(cleaned):
        return None

    parts = _SEPARATOR_RE.split(cleaned)
    if len(parts) != 2:
        return None
    try:
        lat = float(parts[0])
        lon = float(parts[1])
    except ValueError:
        return None

    if not in_range(lat, lon):
        return None
    return Coordinates(lat=lat, lon=lon)


def classify_query(text: str) -> Coordinates | AddressQuery:
    """Decide once whether a search query is coordinates or an address."""
    coords = try_parse_coordinates(text)
    if coords is not None:
        return coords
    return AddressQuery(text=text.strip())
