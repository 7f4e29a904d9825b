"""Example locations used in CLI help and test fixtures."""

from geoweather.models.common import Coordinates

EXAMPLE_ADDRESS = "350 Fifth Avenue, New York, NY 10118"

EXAMPLE_COORDINATES = Coordinates(lat=40.748817, lon=-73.985428)
