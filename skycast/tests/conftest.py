"""Shared test fixtures."""

from pathlib import Path

import pytest
import yaml

from skycast.config.schema import AppConfig
from skycast.ingest.payloads import parse_air_quality_payload, parse_weather_payload
from skycast.models.common import Location
from skycast.models.forecast import RawAirQualitySeries, RawWeatherSeries
from skycast.tests.payloads import make_air_payload, make_weather_payload


@pytest.fixture
def austin() -> Location:
    return Location(
        name="Austin",
        latitude=30.2672,
        longitude=-97.7431,
        country="United States",
        state="Texas",
    )


@pytest.fixture
def weather_payload() -> dict:
    return make_weather_payload()


@pytest.fixture
def air_payload() -> dict:
    return make_air_payload()


@pytest.fixture
def raw_weather(weather_payload: dict) -> RawWeatherSeries:
    return parse_weather_payload(weather_payload)


@pytest.fixture
def raw_air(air_payload: dict) -> RawAirQualitySeries:
    return parse_air_quality_payload(air_payload)


@pytest.fixture
def default_config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "units": {"temperature": "F", "time_format": "12", "pressure": "inHg"},
        "radar": {"zoom": 8},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
