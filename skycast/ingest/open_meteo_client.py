"""Open-Meteo forecast and air-quality API client."""

import logging

from skycast.config.schema import IngestConfig
from skycast.ingest.http_retry import get_json

logger = logging.getLogger(__name__)

HOURLY_VARIABLES = (
    "temperature_2m",
    "precipitation_probability",
    "precipitation",
    "windspeed_10m",
    "winddirection_10m",
    "uv_index",
    "visibility",
    "relativehumidity_2m",
    "pressure_msl",
    "cloudcover",
)
DAILY_VARIABLES = ("temperature_2m_max", "temperature_2m_min", "sunrise", "sunset")


class OpenMeteoClient:
    def __init__(self, config: IngestConfig | None = None):
        self.config = config or IngestConfig()

    def _get(self, url: str, params: dict) -> dict:
        return get_json(
            url,
            params=params,
            headers={"User-Agent": self.config.user_agent},
            timeout=self.config.timeout_seconds,
            max_retries=self.config.max_retries,
            retry_base_delay=self.config.retry_base_delay_seconds,
        )

    def get_forecast(self, lat: float, lon: float) -> dict:
        """Fetch hourly and daily forecast arrays in the location's timezone."""
        url = f"{self.config.forecast_base_url}/forecast"
        params = {
            "latitude": lat,
            "longitude": lon,
            "hourly": ",".join(HOURLY_VARIABLES),
            "daily": ",".join(DAILY_VARIABLES),
            "timezone": "auto",
            "forecast_days": self.config.forecast_days,
        }
        logger.debug("Fetching forecast for %.4f,%.4f", lat, lon)
        return self._get(url, params)

    def get_air_quality(self, lat: float, lon: float) -> dict:
        """Fetch hourly US AQI covering the same days as the forecast."""
        url = f"{self.config.air_quality_base_url}/air-quality"
        params = {
            "latitude": lat,
            "longitude": lon,
            "hourly": "us_aqi",
            "timezone": "auto",
            "forecast_days": self.config.forecast_days,
        }
        logger.debug("Fetching air quality for %.4f,%.4f", lat, lon)
        return self._get(url, params)
