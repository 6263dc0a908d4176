"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field


class TemperatureUnit(StrEnum):
    CELSIUS = "C"
    FAHRENHEIT = "F"


class TimeFormat(StrEnum):
    TWELVE_HOUR = "12"
    TWENTY_FOUR_HOUR = "24"


class PressureUnit(StrEnum):
    MILLIBARS = "mb"
    INCHES_HG = "inHg"


class UnitsConfig(BaseModel):
    model_config = {"extra": "forbid"}

    temperature: TemperatureUnit = TemperatureUnit.CELSIUS
    time_format: TimeFormat = TimeFormat.TWENTY_FOUR_HOUR
    pressure: PressureUnit = PressureUnit.MILLIBARS


class RadarConfig(BaseModel):
    model_config = {"extra": "forbid"}

    zoom: int = Field(default=9, ge=0, le=18)
    tile_size: int = Field(default=256, gt=0)
    window_seconds: int = Field(default=7200, ge=0)
    color_scheme: int = Field(default=2, ge=0)
    options: str = "1_1"
    tile_host: str = "https://tilecache.rainviewer.com"
    base_map_url: str = "https://tile.openstreetmap.org/{z}/{x}/{y}.png"
    refresh_interval_seconds: int = Field(default=300, ge=1)


class IngestConfig(BaseModel):
    model_config = {"extra": "forbid"}

    forecast_base_url: str = "https://api.open-meteo.com/v1"
    air_quality_base_url: str = "https://air-quality-api.open-meteo.com/v1"
    geocoding_base_url: str = "https://nominatim.openstreetmap.org"
    radar_feed_url: str = "https://api.rainviewer.com/public/weather-maps.json"
    user_agent: str = "skycast/0.1.0"
    timeout_seconds: float = Field(default=30.0, gt=0.0)
    max_retries: int = Field(default=3, ge=0)
    retry_base_delay_seconds: float = Field(default=2.0, ge=0.0)
    search_limit: int = Field(default=5, ge=1, le=50)
    forecast_days: int = Field(default=7, ge=1, le=16)


class LocationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    name: str
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    country: str
    state: str | None = None


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    units: UnitsConfig = UnitsConfig()
    radar: RadarConfig = RadarConfig()
    ingest: IngestConfig = IngestConfig()
    default_location: LocationConfig = LocationConfig(
        name="Austin",
        latitude=30.2672,
        longitude=-97.7431,
        country="United States",
        state="Texas",
    )
