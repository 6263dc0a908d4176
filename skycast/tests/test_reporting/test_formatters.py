"""Tests for display formatting of forecasts and radar frames."""

import json
from datetime import UTC, datetime, timedelta, timezone

from skycast.config.schema import PressureUnit, TemperatureUnit, TimeFormat, UnitsConfig
from skycast.forecast.aggregator import aggregate_forecast
from skycast.models.forecast import Condition, WindDirection
from skycast.models.radar import RadarFrame
from skycast.reporting.formatters import (
    CONDITION_SYMBOLS,
    WIND_ARROWS,
    convert_pressure,
    format_forecast_json,
    format_forecast_text,
    format_frames_json,
    format_hour,
    format_radar_time,
    format_temperature,
    forecast_to_dict,
)


class TestUnitFormatting:
    def test_temperature(self):
        assert format_temperature(0, TemperatureUnit.FAHRENHEIT) == "32°F"
        assert format_temperature(21, TemperatureUnit.CELSIUS) == "21°C"

    def test_pressure(self):
        assert convert_pressure(1013, PressureUnit.INCHES_HG) == "29.91"
        assert convert_pressure(1013, PressureUnit.MILLIBARS) == "1013"

    def test_hour(self):
        assert format_hour(15, TimeFormat.TWELVE_HOUR) == "3:00 PM"
        assert format_hour(0, TimeFormat.TWELVE_HOUR) == "12:00 AM"
        assert format_hour(12, TimeFormat.TWELVE_HOUR) == "12:00 PM"
        assert format_hour(15, TimeFormat.TWENTY_FOUR_HOUR) == "15:00"
        assert format_hour(25, TimeFormat.TWENTY_FOUR_HOUR) == "01:00"

    def test_radar_time(self):
        assert format_radar_time(0, TimeFormat.TWENTY_FOUR_HOUR, tz=UTC) == "00:00"
        assert format_radar_time(13 * 3600 + 5 * 60, TimeFormat.TWELVE_HOUR, tz=UTC) == "1:05 PM"

    def test_radar_time_in_location_offset(self):
        central = timezone(timedelta(hours=-5))
        assert format_radar_time(0, TimeFormat.TWENTY_FOUR_HOUR, tz=central) == "19:00"

    def test_radar_time_defaults_to_local_zone(self):
        ts = 1_777_647_000
        expected = datetime.fromtimestamp(ts).strftime("%H:%M")
        assert format_radar_time(ts, TimeFormat.TWENTY_FOUR_HOUR) == expected


class TestSymbols:
    def test_every_condition_has_symbol(self):
        assert set(CONDITION_SYMBOLS) == set(Condition)

    def test_every_direction_has_arrow(self):
        assert set(WIND_ARROWS) == set(WindDirection)


class TestForecastOutput:
    def test_text_report(self, austin, raw_weather, raw_air):
        model = aggregate_forecast(austin, raw_weather, raw_air, datetime(2026, 5, 1, 14, 0))
        units = UnitsConfig(temperature="F", time_format="12", pressure="inHg")
        text = format_forecast_text(model, units)
        assert text.startswith("=== Austin, Texas, United States ===")
        assert "68°F" in text
        assert "2:00 PM" in text
        assert "Day 13h 45m" in text
        assert "2026-05-02 77°F/59°F" in text

    def test_dict_round_trips_through_json(self, austin, raw_weather, raw_air):
        model = aggregate_forecast(austin, raw_weather, raw_air, datetime(2026, 5, 1, 14, 0))
        data = json.loads(format_forecast_json(model))
        assert data == json.loads(json.dumps(forecast_to_dict(model)))
        assert data["current"]["condition"] == "clear-day"
        assert data["current"]["wind_direction"] == "N"
        assert data["sun_moon"]["dawn"] == "2026-05-01T06:00:00"
        assert data["sun_moon"]["night_length"] == "10h 15m"

    def test_frames_json(self):
        out = json.loads(format_frames_json([RadarFrame(1, "/a")]))
        assert out == [{"time": 1, "path": "/a"}]
