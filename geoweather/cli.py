"""CLI entry point for Geo Weather."""

import argparse
import asyncio
import logging

from geoweather.config.defaults import EXAMPLE_ADDRESS, EXAMPLE_COORDINATES
from geoweather.config.loader import get_config_value, load_config, set_config_value
from geoweather.config.schema import AppConfig
from geoweather.errors import GeoWeatherError
from geoweather.ingest.address_resolver import AddressResolver
from geoweather.ingest.device_locator import DeviceLocator
from geoweather.ingest.forecast_retriever import ForecastRetriever
from geoweather.models.common import Coordinates
from geoweather.reporting.formatters import format_forecast_json, format_forecast_text

logger = logging.getLogger("geoweather")

EPILOG = (
    "examples:\n"
    f'  geoweather forecast "{EXAMPLE_ADDRESS}"\n'
    f'  geoweather forecast "{EXAMPLE_COORDINATES.lat}, {EXAMPLE_COORDINATES.lon}"'
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="geoweather",
        description="Multi-day NWS forecast for an address or coordinates",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", default=None, help="Config YAML path")

    sub = parser.add_subparsers(dest="command")

    # forecast
    fc_p = sub.add_parser("forecast", help="Forecast for an address or 'lat, lon'")
    fc_p.add_argument("query", help="Address or coordinates")
    _add_output_flags(fc_p)

    # here
    here_p = sub.add_parser("here", help="Forecast for the device position")
    _add_output_flags(here_p)

    # geocode
    geo_p = sub.add_parser("geocode", help="List geocoder matches for an address")
    geo_p.add_argument("address", help="One-line address")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host", default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8000)

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    config = load_config(args.config)

    logging.basicConfig(
        level=config.logging.level.upper(),
        format=config.logging.format,
    )

    if args.command == "forecast":
        return _run(_cmd_forecast(config, args))
    elif args.command == "here":
        return _run(_cmd_here(config, args))
    elif args.command == "geocode":
        return _run(_cmd_geocode(config, args))
    elif args.command == "serve":
        return _cmd_serve(args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _add_output_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("--detailed", action="store_true", help="Show detailed forecasts")
    p.add_argument("--json", action="store_true", help="Print JSON")


def _run(coro) -> int:
    try:
        return asyncio.run(coro)
    except GeoWeatherError as e:
        print(f"Error: {e.message}")
        return 1


async def _print_forecast(config: AppConfig, coords: Coordinates, args) -> int:
    retriever = ForecastRetriever.from_config(config.weather, logger)
    periods = await retriever.fetch_forecast(coords)
    if args.json:
        print(format_forecast_json(periods, coords))
    else:
        print(format_forecast_text(periods, coords, detailed=args.detailed))
    return 0


async def _cmd_forecast(config: AppConfig, args) -> int:
    resolver = AddressResolver.from_config(config.geocoder, logger)
    coords = await resolver.resolve_location(args.query)
    return await _print_forecast(config, coords, args)


async def _cmd_here(config: AppConfig, args) -> int:
    locator = DeviceLocator.from_config(config.device, logger)
    coords = await locator.get_device_coordinates()
    return await _print_forecast(config, coords, args)


async def _cmd_geocode(config: AppConfig, args) -> int:
    resolver = AddressResolver.from_config(config.geocoder, logger)
    matches = await resolver.find_matches(args.address)
    if not matches:
        print("No matches")
        return 1
    for m in matches:
        print(f"{m.coordinates.lat:.6f}, {m.coordinates.lon:.6f}  {m.matched_address}")
    return 0


def _cmd_serve(args) -> int:
    import uvicorn

    uvicorn.run("geoweather.api:app", host=args.host, port=args.port)
    return 0


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
        except (KeyError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        print(f"Set {key.strip()} = {get_config_value(new_config, key.strip())}")
        return 0
    else:
        print("Use: config show | config set key=value")
        return 1
