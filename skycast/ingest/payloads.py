"""Map raw Open-Meteo JSON documents onto feed series models."""

from typing import Any

from skycast.forecast.aggregator import InsufficientDataError
from skycast.models.forecast import RawAirQualitySeries, RawWeatherSeries

# series attribute -> feed key
HOURLY_KEYS = {
    "time": "time",
    "temperature": "temperature_2m",
    "precipitation": "precipitation",
    "precipitation_probability": "precipitation_probability",
    "wind_speed": "windspeed_10m",
    "wind_direction": "winddirection_10m",
    "uv_index": "uv_index",
    "visibility": "visibility",
    "humidity": "relativehumidity_2m",
    "pressure": "pressure_msl",
    "cloud_cover": "cloudcover",
}
DAILY_KEYS = {
    "daily_time": "time",
    "temperature_max": "temperature_2m_max",
    "temperature_min": "temperature_2m_min",
    "sunrise": "sunrise",
    "sunset": "sunset",
}


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    section = raw.get(name)
    if not isinstance(section, dict):
        raise InsufficientDataError(f"payload has no '{name}' section")
    return section


def _series(section: dict[str, Any], key: str, where: str) -> list:
    values = section.get(key)
    if not isinstance(values, list):
        raise InsufficientDataError(f"{where} series '{key}' is missing")
    return values


def parse_weather_payload(raw: dict[str, Any]) -> RawWeatherSeries:
    hourly = _section(raw, "hourly")
    daily = _section(raw, "daily")
    fields: dict[str, Any] = {
        attr: _series(hourly, key, "hourly") for attr, key in HOURLY_KEYS.items()
    }
    fields.update(
        {attr: _series(daily, key, "daily") for attr, key in DAILY_KEYS.items()}
    )
    return RawWeatherSeries(
        **fields, utc_offset_seconds=int(raw.get("utc_offset_seconds") or 0)
    )


def parse_air_quality_payload(raw: dict[str, Any]) -> RawAirQualitySeries:
    hourly = _section(raw, "hourly")
    return RawAirQualitySeries(
        time=_series(hourly, "time", "hourly"),
        us_aqi=_series(hourly, "us_aqi", "hourly"),
    )
