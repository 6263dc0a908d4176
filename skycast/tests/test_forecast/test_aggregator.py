"""Tests for forecast aggregation over aligned hourly/daily series."""

from datetime import date, datetime

import pytest

from skycast.forecast.aggregator import DAILY_REDUCERS, InsufficientDataError, aggregate_forecast
from skycast.ingest.payloads import parse_air_quality_payload, parse_weather_payload
from skycast.models.forecast import Condition, WindDirection
from skycast.tests.payloads import make_air_payload, make_weather_payload, with_hourly

NOW = datetime(2026, 5, 1, 14, 0)


def _aggregate(austin, weather_payload=None, air_payload=None, now=NOW):
    weather = parse_weather_payload(weather_payload or make_weather_payload())
    air = parse_air_quality_payload(air_payload or make_air_payload())
    return aggregate_forecast(austin, weather, air, now)


class TestShape:
    def test_counts(self, austin, raw_weather, raw_air):
        model = aggregate_forecast(austin, raw_weather, raw_air, NOW)
        assert len(model.hourly) == 24
        assert len(model.daily) == 7
        assert model.location == austin

    def test_starts_at_current_hour_and_wraps(self, austin, raw_weather, raw_air):
        model = aggregate_forecast(austin, raw_weather, raw_air, NOW)
        assert [h.hour for h in model.hourly[:3]] == [14, 15, 16]
        assert model.hourly[10].hour == 0
        assert model.hourly[-1].hour == 13
        assert model.hourly[0].time == "2026-05-01T14:00"
        assert model.hourly[-1].time == "2026-05-02T13:00"

    def test_current_is_first_hourly(self, austin, raw_weather, raw_air):
        model = aggregate_forecast(austin, raw_weather, raw_air, NOW)
        assert model.current == model.hourly[0]

    def test_minutes_truncated(self, austin, raw_weather, raw_air):
        model = aggregate_forecast(
            austin, raw_weather, raw_air, datetime(2026, 5, 1, 14, 59, 59)
        )
        assert model.current.hour == 14

    def test_sun_moon_is_day_zero(self, austin, raw_weather, raw_air):
        model = aggregate_forecast(austin, raw_weather, raw_air, NOW)
        assert model.sun_moon.sunrise == datetime(2026, 5, 1, 6, 30)
        assert model.sun_moon.dusk == datetime(2026, 5, 1, 20, 45)

    def test_idempotent(self, austin, raw_weather, raw_air):
        first = aggregate_forecast(austin, raw_weather, raw_air, NOW)
        second = aggregate_forecast(austin, raw_weather, raw_air, NOW)
        assert first == second


class TestHourlyRecords:
    def test_conversions(self, austin):
        payload = make_weather_payload(
            hourly={
                "temperature_2m": with_hourly(20.0, {14: 21.5}),
                "precipitation": with_hourly(0.0, {14: 0.04321}),
                "windspeed_10m": with_hourly(10.0, {14: 100.0}),
                "winddirection_10m": with_hourly(0, {14: 270}),
                "visibility": with_hourly(16000.0, {14: 24140.0}),
                "pressure_msl": with_hourly(1013.2, {14: 1009.5}),
            }
        )
        current = _aggregate(austin, payload).current
        assert current.temperature == 22
        assert current.precipitation_amount == 0.04
        assert current.wind_speed == 62
        assert current.wind_direction == WindDirection.W
        assert current.visibility == 15
        assert current.humidity == 50
        assert current.pressure == 1010
        assert current.uv_index == 3

    def test_aqi_taken_at_same_index(self, austin):
        model = _aggregate(austin)
        assert model.hourly[0].aqi == 14
        assert model.hourly[10].aqi == 24

    def test_aqi_may_be_null(self, austin):
        aqi = [None] * 168
        model = _aggregate(austin, air_payload=make_air_payload(aqi=aqi))
        assert model.current.aqi is None

    def test_day_and_night_symbols(self, austin):
        model = _aggregate(austin)
        by_time = {h.time: h.condition for h in model.hourly}
        assert by_time["2026-05-01T14:00"] == Condition.CLEAR_DAY
        assert by_time["2026-05-01T20:00"] == Condition.CLEAR_DAY
        assert by_time["2026-05-01T21:00"] == Condition.CLEAR_NIGHT
        assert by_time["2026-05-02T05:00"] == Condition.CLEAR_NIGHT

    def test_next_day_hours_compare_against_day_zero_window(self, austin):
        model = _aggregate(austin, now=datetime(2026, 5, 1, 20, 0))
        by_time = {h.time: h.condition for h in model.hourly}
        assert by_time["2026-05-01T20:00"] == Condition.CLEAR_DAY
        # Past the day-0 dusk (20:45), so still night at next-day noon
        assert by_time["2026-05-02T06:00"] == Condition.CLEAR_NIGHT
        assert by_time["2026-05-02T12:00"] == Condition.CLEAR_NIGHT

    def test_precipitation_classified(self, austin):
        payload = make_weather_payload(
            hourly={"precipitation_probability": with_hourly(0, {15: 75})}
        )
        model = _aggregate(austin, payload)
        assert model.hourly[1].condition == Condition.RAIN_HEAVY
        assert model.hourly[1].precipitation_probability == 75


class TestDailyRecords:
    def test_date_shifted_forward_one_day(self, austin):
        model = _aggregate(austin)
        assert model.daily[0].date == "2026-05-02"
        assert model.daily[6].date == "2026-05-08"

    def test_month_boundary_shift(self, austin):
        payload = make_weather_payload(days=2, start=date(2026, 4, 30))
        air = make_air_payload(days=2, start=date(2026, 4, 30))
        model = _aggregate(austin, payload, air, now=datetime(2026, 4, 30, 0, 0))
        assert [d.date for d in model.daily] == ["2026-05-01", "2026-05-02"]

    def test_high_low_rounded(self, austin):
        day = _aggregate(austin).daily[0]
        assert day.high == 25
        assert day.low == 15

    def test_precipitation_reduced_with_max(self, austin):
        payload = make_weather_payload(
            hourly={
                "precipitation_probability": with_hourly(0, {27: 40, 30: 80}),
                "precipitation": with_hourly(0.0, {28: 0.3, 40: 2.456}),
            }
        )
        day = _aggregate(austin, payload).daily[1]
        assert day.precipitation_probability == 80
        assert day.precipitation_amount == 2.46
        assert day.condition == Condition.RAIN_HEAVY

    def test_cloud_cover_reduced_with_mean(self, austin):
        # day 1: half the hours fully overcast -> mean 50 -> partly cloudy
        clouds = [10] * 168
        clouds[24:36] = [100] * 12
        clouds[36:48] = [0] * 12
        payload = make_weather_payload(hourly={"cloudcover": clouds})
        day = _aggregate(austin, payload).daily[1]
        assert day.condition == Condition.PARTLY_CLOUDY_DAY

    def test_daily_never_night(self, austin):
        model = _aggregate(austin, make_weather_payload(sunrise="23:00", sunset="23:30"))
        assert all(d.condition == Condition.CLEAR_DAY for d in model.daily)

    def test_other_fields_from_first_slot(self, austin):
        payload = make_weather_payload(
            hourly={
                "windspeed_10m": with_hourly(10.0, {48: 50.0}),
                "winddirection_10m": with_hourly(0, {48: 180}),
                "uv_index": with_hourly(3.0, {48: 8.6}),
                "relativehumidity_2m": with_hourly(50, {48: 91, 49: 10}),
            }
        )
        day = _aggregate(austin, payload).daily[2]
        assert day.wind_speed == 31
        assert day.wind_direction == WindDirection.S
        assert day.uv_index == 9
        assert day.humidity == 91
        assert day.aqi == 48 % 100

    def test_first_slot_temperature_drives_snow(self, austin):
        payload = make_weather_payload(
            hourly={
                "temperature_2m": with_hourly(5.0, {72: -3.0}),
                "precipitation": with_hourly(0.0, {80: 0.2}),
            }
        )
        day = _aggregate(austin, payload).daily[3]
        assert day.condition == Condition.SNOW_LIGHT

    def test_reducer_table_covers_classifier_inputs(self):
        for name in ("precipitation", "precipitation_probability", "cloud_cover", "temperature"):
            assert name in DAILY_REDUCERS


class TestInsufficientData:
    def test_short_hourly_series(self, austin):
        payload = make_weather_payload()
        payload["hourly"]["cloudcover"] = payload["hourly"]["cloudcover"][:100]
        with pytest.raises(InsufficientDataError, match="cloud_cover"):
            _aggregate(austin, payload)

    def test_short_aqi_series(self, austin):
        with pytest.raises(InsufficientDataError, match="us_aqi"):
            _aggregate(austin, air_payload=make_air_payload(days=5))

    def test_window_past_end(self, austin):
        payload = make_weather_payload(days=1)
        air = make_air_payload(days=1)
        with pytest.raises(InsufficientDataError):
            _aggregate(austin, payload, air, now=datetime(2026, 5, 1, 1, 0))

    def test_single_day_at_midnight_is_enough(self, austin):
        payload = make_weather_payload(days=1)
        air = make_air_payload(days=1)
        model = _aggregate(austin, payload, air, now=datetime(2026, 5, 1, 0, 0))
        assert len(model.hourly) == 24
        assert len(model.daily) == 1

    def test_empty_daily(self, austin):
        payload = make_weather_payload()
        for key in payload["daily"]:
            payload["daily"][key] = []
        with pytest.raises(InsufficientDataError, match="daily"):
            _aggregate(austin, payload)

    def test_short_daily_field(self, austin):
        payload = make_weather_payload()
        payload["daily"]["sunset"] = payload["daily"]["sunset"][:3]
        with pytest.raises(InsufficientDataError, match="sunset"):
            _aggregate(austin, payload)
