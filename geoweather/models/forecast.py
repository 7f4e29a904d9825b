"""NWS forecast data models."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ForecastPeriod:
    number: int
    name: str
    start_time: str
    end_time: str
    is_daytime: bool
    temperature: int | float | None
    temperature_unit: str
    temperature_trend: str | None
    wind_speed: str
    wind_direction: str
    icon: str
    short_forecast: str
    detailed_forecast: str

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "ForecastPeriod":
        """Build a period from one entry of ``properties.periods``."""
        return cls(
            number=int(raw.get("number") or 0),
            name=raw.get("name", ""),
            start_time=raw.get("startTime", ""),
            end_time=raw.get("endTime", ""),
            is_daytime=bool(raw.get("isDaytime", False)),
            temperature=_extract_temperature(raw.get("temperature")),
            temperature_unit=raw.get("temperatureUnit") or "F",
            temperature_trend=raw.get("temperatureTrend") or None,
            wind_speed=_text_value(raw.get("windSpeed")),
            wind_direction=raw.get("windDirection", ""),
            icon=raw.get("icon", ""),
            short_forecast=raw.get("shortForecast", ""),
            detailed_forecast=raw.get("detailedForecast", ""),
        )

    def to_api(self) -> dict[str, Any]:
        """Serialize back to the NWS camelCase shape."""
        return {
            "number": self.number,
            "name": self.name,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "isDaytime": self.is_daytime,
            "temperature": self.temperature,
            "temperatureUnit": self.temperature_unit,
            "temperatureTrend": self.temperature_trend,
            "windSpeed": self.wind_speed,
            "windDirection": self.wind_direction,
            "icon": self.icon,
            "shortForecast": self.short_forecast,
            "detailedForecast": self.detailed_forecast,
        }


def _extract_temperature(value: Any) -> int | float | None:
    # Newer NWS payloads wrap values as {"unitCode": ..., "value": n}
    if isinstance(value, dict):
        value = value.get("value")
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _text_value(value: Any) -> str:
    if isinstance(value, dict):
        inner = value.get("value")
        return "" if inner is None else str(inner)
    return "" if value is None else str(value)
