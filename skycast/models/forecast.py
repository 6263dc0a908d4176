"""Raw feed series and normalized forecast records."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum

from skycast.models.common import Location


class Condition(StrEnum):
    SNOW_HEAVY = "snow-heavy"
    RAIN_HEAVY = "rain-heavy"
    SNOW_LIGHT = "snow-light"
    RAIN_LIGHT = "rain-light"
    OVERCAST = "overcast"
    PARTLY_CLOUDY_DAY = "partly-cloudy-day"
    PARTLY_CLOUDY_NIGHT = "partly-cloudy-night"
    CLEAR_NIGHT = "clear-night"
    CLEAR_DAY = "clear-day"


class WindDirection(StrEnum):
    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"


@dataclass(frozen=True)
class RawWeatherSeries:
    """Hourly and daily arrays as delivered by the weather feed.

    All hourly lists share one index; ``time[i]`` is the local timestamp of
    every other hourly value at ``i``.
    """

    time: list[str]
    temperature: list[float]
    precipitation: list[float]
    precipitation_probability: list[float]
    wind_speed: list[float]
    wind_direction: list[float]
    uv_index: list[float]
    visibility: list[float]
    humidity: list[float]
    pressure: list[float]
    cloud_cover: list[float]
    daily_time: list[str]
    temperature_max: list[float]
    temperature_min: list[float]
    sunrise: list[str]
    sunset: list[str]
    utc_offset_seconds: int = 0


@dataclass(frozen=True)
class RawAirQualitySeries:
    time: list[str]
    us_aqi: list[int | None]


@dataclass(frozen=True)
class SunMoonWindow:
    dawn: datetime
    sunrise: datetime
    sunset: datetime
    dusk: datetime
    day_length: timedelta
    night_length: timedelta

    @property
    def day_length_label(self) -> str:
        return format_duration(self.day_length)

    @property
    def night_length_label(self) -> str:
        return format_duration(self.night_length)


@dataclass(frozen=True)
class HourlyRecord:
    hour: int  # 0-23, wraps past midnight
    time: str
    temperature: int
    condition: Condition
    precipitation_probability: int
    precipitation_amount: float
    wind_speed: int  # mph
    wind_direction: WindDirection
    uv_index: int
    aqi: int | None
    visibility: int  # miles
    humidity: int
    pressure: int  # hPa


@dataclass(frozen=True)
class DailyRecord:
    date: str  # YYYY-MM-DD
    high: int
    low: int
    condition: Condition
    precipitation_probability: int
    precipitation_amount: float
    wind_speed: int
    wind_direction: WindDirection
    uv_index: int
    aqi: int | None
    visibility: int
    humidity: int
    pressure: int


@dataclass(frozen=True)
class ForecastModel:
    location: Location
    current: HourlyRecord
    hourly: tuple[HourlyRecord, ...]
    daily: tuple[DailyRecord, ...]
    sun_moon: SunMoonWindow


def format_duration(delta: timedelta) -> str:
    """Render a duration as ``"{hours}h {minutes}m"``, floored to the minute."""
    total_minutes = int(delta.total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours}h {minutes}m"
