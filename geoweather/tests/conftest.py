"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from geoweather.config.schema import AppConfig

NWS_BASE = "https://test-nws.example.com"
CENSUS_BASE = "https://test-census.example.com"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def load_fixture(fixtures_dir: Path):
    def _load(name: str) -> dict:
        with open(fixtures_dir / name) as f:
            return json.load(f)

    return _load


@pytest.fixture
def test_config() -> AppConfig:
    """Config pointing both upstreams at test hosts."""
    return AppConfig(
        geocoder={"base_url": CENSUS_BASE},
        weather={"base_url": NWS_BASE, "user_agent": "geoweather-tests (qa@example.com)"},
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "geocoder": {"base_url": CENSUS_BASE},
        "weather": {"base_url": NWS_BASE, "max_periods": 14},
        "logging": {"level": "WARNING"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


def make_periods(count: int) -> list[dict]:
    """Build ``count`` NWS-shaped forecast periods alternating day/night."""
    return [
        {
            "number": i + 1,
            "name": f"Period {i + 1}",
            "startTime": f"2026-01-{i // 2 + 1:02d}T{'06' if i % 2 == 0 else '18'}:00:00-05:00",
            "endTime": f"2026-01-{i // 2 + 1:02d}T{'18' if i % 2 == 0 else '23'}:00:00-05:00",
            "isDaytime": i % 2 == 0,
            "temperature": 70 + i,
            "temperatureUnit": "F",
            "temperatureTrend": None,
            "windSpeed": "10 mph",
            "windDirection": "NW",
            "icon": "https://api.weather.gov/icons/land/day/skc?size=medium",
            "shortForecast": "Sunny",
            "detailedForecast": f"Sunny skies for period {i + 1}",
        }
        for i in range(count)
    ]


@pytest.fixture
def period_factory():
    return make_periods
