"""Geo Weather HTTP API: geocoding, reverse geocoding and forecast routes."""

import logging
import os

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from geoweather.config.loader import load_config
from geoweather.config.schema import AppConfig
from geoweather.errors import ErrorKind, ForecastError, GeoWeatherError, ValidationError
from geoweather.ingest.address_resolver import AddressResolver
from geoweather.ingest.forecast_retriever import ForecastRetriever
from geoweather.models.common import Coordinates, in_range

logger = logging.getLogger(__name__)

CONFIG_ENV = "GEOWEATHER_CONFIG"

app = FastAPI(title="Geo Weather", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)


def get_config() -> AppConfig:
    return load_config(os.environ.get(CONFIG_ENV) or None)


def get_resolver(config: AppConfig = Depends(get_config)) -> AddressResolver:
    return AddressResolver.from_config(config.geocoder, logger)


def get_retriever(config: AppConfig = Depends(get_config)) -> ForecastRetriever:
    return ForecastRetriever.from_config(config.weather, logger)


def error_status(exc: GeoWeatherError) -> int:
    """Map an error to the HTTP status returned to API callers."""
    if isinstance(exc, ValidationError):
        return 400
    kind = getattr(exc, "kind", None)
    if kind == ErrorKind.NOT_FOUND:
        # Missing forecast URL is an upstream defect, not a bad query
        return 500 if isinstance(exc, ForecastError) else 404
    if exc.status_code is not None and exc.status_code >= 400:
        return exc.status_code
    return 502


@app.exception_handler(GeoWeatherError)
async def handle_geoweather_error(request: Request, exc: GeoWeatherError):
    status = error_status(exc)
    logger.warning("%s %s -> %d: %s", request.method, request.url.path, status, exc.message)
    return JSONResponse({"error": exc.message}, status_code=status)


def _parse_coordinates(lat: str | None, lon: str | None) -> Coordinates:
    if not lat or not lon:
        raise ValidationError("Latitude and longitude are required")
    try:
        lat_f, lon_f = float(lat), float(lon)
    except ValueError:
        raise ValidationError("Latitude and longitude must be numbers") from None
    if not in_range(lat_f, lon_f):
        raise ValidationError("Latitude and longitude are out of range")
    return Coordinates(lat=lat_f, lon=lon_f)


# ── Routes ──────────────────────────────────────────────────────


@app.get("/api/geocode")
async def geocode(
    address: str | None = None,
    resolver: AddressResolver = Depends(get_resolver),
):
    """Forward geocoding; returns matches in the Census response shape."""
    if address is None or not address.strip():
        raise ValidationError("Address is required")
    matches = await resolver.find_matches(address)
    return {
        "result": {
            "addressMatches": [
                {
                    "matchedAddress": m.matched_address,
                    "coordinates": {"x": m.coordinates.lon, "y": m.coordinates.lat},
                }
                for m in matches
            ]
        }
    }


@app.get("/api/reverse-geocode")
async def reverse_geocode(
    lat: str | None = None,
    lon: str | None = None,
    resolver: AddressResolver = Depends(get_resolver),
):
    coords = _parse_coordinates(lat, lon)
    geographies = await resolver.reverse_geocode(coords)
    return {
        "coordinates": coords.to_dict(),
        "geographies": [
            {"layer": g.layer, "name": g.name, "geoid": g.geoid} for g in geographies
        ],
    }


@app.get("/api/forecast")
async def forecast(
    lat: str | None = None,
    lon: str | None = None,
    retriever: ForecastRetriever = Depends(get_retriever),
):
    coords = _parse_coordinates(lat, lon)
    periods = await retriever.fetch_forecast(coords)
    return {"periods": [p.to_api() for p in periods]}


@app.get("/api/search")
async def search(
    q: str | None = None,
    resolver: AddressResolver = Depends(get_resolver),
    retriever: ForecastRetriever = Depends(get_retriever),
):
    """Resolve a free-text query and return its forecast in one call."""
    coords = await resolver.resolve_location(q or "")
    periods = await retriever.fetch_forecast(coords)
    return {
        "coordinates": coords.to_dict(),
        "periods": [p.to_api() for p in periods],
    }
