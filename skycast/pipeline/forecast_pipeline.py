"""Forecast pipeline: fetch both feeds, reverse-geocode, aggregate."""

import logging
from datetime import UTC, datetime, timedelta

from skycast.config.schema import AppConfig
from skycast.forecast.aggregator import aggregate_forecast
from skycast.ingest.nominatim_client import NominatimClient
from skycast.ingest.open_meteo_client import OpenMeteoClient
from skycast.ingest.payloads import parse_air_quality_payload, parse_weather_payload
from skycast.models.common import Location, utc_now
from skycast.models.forecast import ForecastModel

logger = logging.getLogger(__name__)


def local_now(utc_offset_seconds: int, now: datetime | None = None) -> datetime:
    """Wall-clock time at the forecast location, as a naive datetime.

    Naive ``now`` values are taken to be local already.
    """
    if now is None:
        now = utc_now()
    if now.tzinfo is None:
        return now
    shifted = now.astimezone(UTC) + timedelta(seconds=utc_offset_seconds)
    return shifted.replace(tzinfo=None)


class ForecastPipeline:
    def __init__(
        self,
        config: AppConfig,
        open_meteo: OpenMeteoClient | None = None,
        geocoder: NominatimClient | None = None,
    ):
        self.config = config
        self.open_meteo = open_meteo or OpenMeteoClient(config.ingest)
        self.geocoder = geocoder or NominatimClient(config.ingest)

    def run(
        self,
        lat: float | None = None,
        lon: float | None = None,
        now: datetime | None = None,
    ) -> ForecastModel:
        """Fetch and aggregate the forecast for a point.

        Falls back to the configured default location when no coordinates are
        given. Weather and air quality must both be retrieved; if either fetch
        fails nothing is aggregated.
        """
        if lat is None or lon is None:
            lat = self.config.default_location.latitude
            lon = self.config.default_location.longitude

        try:
            weather_raw = self.open_meteo.get_forecast(lat, lon)
            air_raw = self.open_meteo.get_air_quality(lat, lon)
        except Exception:
            logger.exception("Failed to fetch feeds for %.4f,%.4f", lat, lon)
            raise

        location = self.geocoder.reverse(lat, lon)
        return self.build(location, weather_raw, air_raw, now)

    def build(
        self,
        location: Location,
        weather_raw: dict,
        air_raw: dict,
        now: datetime | None = None,
    ) -> ForecastModel:
        """Aggregate already-retrieved payloads."""
        weather = parse_weather_payload(weather_raw)
        air_quality = parse_air_quality_payload(air_raw)
        at = local_now(weather.utc_offset_seconds, now)
        model = aggregate_forecast(location, weather, air_quality, at)
        logger.info(
            "Forecast for %s: %d°C %s, %d days",
            location.name, model.current.temperature,
            model.current.condition.value, len(model.daily),
        )
        return model
