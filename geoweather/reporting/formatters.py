"""Output formatters for forecast periods."""

import json

from geoweather.models.common import Coordinates
from geoweather.models.forecast import ForecastPeriod


def format_period_title(p: ForecastPeriod) -> str:
    temp = "--" if p.temperature is None else f"{p.temperature:g}"
    return f"{p.name} - {temp}°{p.temperature_unit}"


def format_period_text(p: ForecastPeriod, detailed: bool = False) -> str:
    """Title line plus the short (or detailed) forecast, like a weather card."""
    lines = [format_period_title(p)]
    body = p.detailed_forecast if detailed else p.short_forecast
    if body:
        lines.append(f"  {body}")
    if detailed:
        wind = " ".join(part for part in (p.wind_speed, p.wind_direction) if part)
        if wind:
            lines.append(f"  Wind: {wind}")
        if p.temperature_trend:
            lines.append(f"  Trend: {p.temperature_trend}")
    return "\n".join(lines)


def format_forecast_text(
    periods: list[ForecastPeriod],
    coords: Coordinates | None = None,
    detailed: bool = False,
) -> str:
    """Plain text forecast for the terminal."""
    lines = []
    if coords is not None:
        lines.append(f"=== Forecast for {coords.lat:.4f}, {coords.lon:.4f} ===")
    if not periods:
        lines.append("No forecast periods available.")
    lines.extend(format_period_text(p, detailed) for p in periods)
    return "\n".join(lines)


def format_forecast_json(
    periods: list[ForecastPeriod], coords: Coordinates | None = None
) -> str:
    """JSON forecast in the upstream period shape."""
    data: dict = {"periods": [p.to_api() for p in periods]}
    if coords is not None:
        data = {"coordinates": coords.to_dict(), **data}
    return json.dumps(data, indent=2, ensure_ascii=False)
