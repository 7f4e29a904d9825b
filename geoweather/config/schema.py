"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field, model_validator

CENSUS_BASE_URL = "https://geocoding.geo.census.gov"
NWS_BASE_URL = "https://api.weather.gov"
DEFAULT_USER_AGENT = "Geo-Weather (geo-weather-gt@gmail.com)"


class GeocoderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = CENSUS_BASE_URL
    benchmark: str = "Public_AR_Current"
    vintage: str = "Current_Current"
    timeout: float = Field(default=30.0, gt=0.0)


class WeatherConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = NWS_BASE_URL
    user_agent: str = Field(default=DEFAULT_USER_AGENT, min_length=1)
    timeout: float = Field(default=30.0, gt=0.0)
    max_periods: int = Field(default=14, ge=1, le=156)


class DeviceConfig(BaseModel):
    model_config = {"extra": "forbid"}

    latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0)
    high_accuracy: bool = True
    timeout_ms: int = Field(default=10_000, gt=0)
    max_age_ms: int = Field(default=300_000, ge=0)

    @model_validator(mode="after")
    def _both_or_neither(self) -> "DeviceConfig":
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("device.latitude and device.longitude go together")
        return self


class LoggingConfig(BaseModel):
    model_config = {"extra": "forbid"}

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    geocoder: GeocoderConfig = GeocoderConfig()
    weather: WeatherConfig = WeatherConfig()
    device: DeviceConfig = DeviceConfig()
    logging: LoggingConfig = LoggingConfig()
