"""Forecast aggregation: raw hourly/daily feed arrays to UI-ready records."""

import logging
from collections.abc import Callable, Sequence
from datetime import date, datetime, timedelta

from skycast.forecast.conditions import classify_condition, is_night_at
from skycast.forecast.solar import parse_local_timestamp, solar_window
from skycast.forecast.units import (
    meters_to_miles,
    round_amount,
    round_half_up,
    wind_direction_bucket,
    wind_speed_to_mph,
)
from skycast.models.common import Location
from skycast.models.forecast import (
    DailyRecord,
    ForecastModel,
    HourlyRecord,
    RawAirQualitySeries,
    RawWeatherSeries,
    SunMoonWindow,
)

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24

HOURLY_FIELDS = (
    "time",
    "temperature",
    "precipitation",
    "precipitation_probability",
    "wind_speed",
    "wind_direction",
    "uv_index",
    "visibility",
    "humidity",
    "pressure",
    "cloud_cover",
)
DAILY_FIELDS = ("temperature_max", "temperature_min", "sunrise", "sunset")


class InsufficientDataError(ValueError):
    """Raised when a feed array is shorter than the window it is sliced with."""


def _first(values: Sequence[float]) -> float:
    return values[0]


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


# One reducer per field for a day's 24 hourly slots. Only precipitation and
# cloud cover are aggregated; everything else reads the day's first slot.
DAILY_REDUCERS: dict[str, Callable[[Sequence[float]], float]] = {
    "precipitation_probability": max,
    "precipitation": max,
    "cloud_cover": _mean,
    "temperature": _first,
    "wind_speed": _first,
    "wind_direction": _first,
    "uv_index": _first,
    "visibility": _first,
    "humidity": _first,
    "pressure": _first,
}


def aggregate_forecast(
    location: Location,
    weather: RawWeatherSeries,
    air_quality: RawAirQualitySeries,
    now: datetime,
) -> ForecastModel:
    """Build a ForecastModel from aligned weather and air-quality series.

    Args:
        location: The location the series were fetched for.
        weather: Hourly and daily weather arrays sharing one hourly index,
            where index 0 is local midnight of the first daily entry.
        air_quality: Hourly AQI aligned to the same index.
        now: Current time, already local to the location.

    Returns:
        A ForecastModel with 24 hourly records starting at the current hour
        and one daily record per daily entry.

    Raises:
        InsufficientDataError: If any array is shorter than required.
    """
    current_index = now.hour
    _check_lengths(weather, air_quality, current_index)

    sun_moon = solar_window(weather.sunrise[0], weather.sunset[0])

    hourly = tuple(
        _build_hourly(weather, air_quality, current_index + i, sun_moon)
        for i in range(HOURS_PER_DAY)
    )
    daily = tuple(
        _build_daily(weather, air_quality, i)
        for i in range(len(weather.daily_time))
    )

    logger.debug(
        "Aggregated %d hourly and %d daily records for %s from hour %d",
        len(hourly), len(daily), location.name, current_index,
    )

    return ForecastModel(
        location=location,
        current=hourly[0],
        hourly=hourly,
        daily=daily,
        sun_moon=sun_moon,
    )


def _check_lengths(
    weather: RawWeatherSeries, air_quality: RawAirQualitySeries, current_index: int
) -> None:
    day_count = len(weather.daily_time)
    if day_count == 0:
        raise InsufficientDataError("daily series is empty")

    for name in DAILY_FIELDS:
        size = len(getattr(weather, name))
        if size < day_count:
            raise InsufficientDataError(
                f"daily {name} has {size} entries, need {day_count}"
            )

    required = max(current_index + HOURS_PER_DAY, day_count * HOURS_PER_DAY)
    for name in HOURLY_FIELDS:
        size = len(getattr(weather, name))
        if size < required:
            raise InsufficientDataError(
                f"hourly {name} has {size} entries, need {required}"
            )

    if len(air_quality.us_aqi) < required:
        raise InsufficientDataError(
            f"hourly us_aqi has {len(air_quality.us_aqi)} entries, need {required}"
        )


def _build_hourly(
    weather: RawWeatherSeries,
    air_quality: RawAirQualitySeries,
    idx: int,
    window: SunMoonWindow,
) -> HourlyRecord:
    # Every hour, including those on the next calendar day, is judged
    # against the day-0 window.
    moment = parse_local_timestamp(weather.time[idx])
    probability = weather.precipitation_probability[idx]
    return HourlyRecord(
        hour=idx % HOURS_PER_DAY,
        time=weather.time[idx],
        temperature=round_half_up(weather.temperature[idx]),
        condition=classify_condition(
            weather.precipitation[idx],
            probability,
            weather.temperature[idx],
            weather.cloud_cover[idx],
            is_night=is_night_at(moment, window),
        ),
        precipitation_probability=round_half_up(probability),
        precipitation_amount=round_amount(weather.precipitation[idx]),
        wind_speed=wind_speed_to_mph(weather.wind_speed[idx]),
        wind_direction=wind_direction_bucket(weather.wind_direction[idx]),
        uv_index=round_half_up(weather.uv_index[idx]),
        aqi=air_quality.us_aqi[idx],
        visibility=meters_to_miles(weather.visibility[idx]),
        humidity=round_half_up(weather.humidity[idx]),
        pressure=round_half_up(weather.pressure[idx]),
    )


def _build_daily(
    weather: RawWeatherSeries,
    air_quality: RawAirQualitySeries,
    day: int,
) -> DailyRecord:
    start = day * HOURS_PER_DAY
    end = start + HOURS_PER_DAY
    reduced = {
        name: reducer(getattr(weather, name)[start:end])
        for name, reducer in DAILY_REDUCERS.items()
    }
    return DailyRecord(
        date=_display_date(weather.daily_time[day]),
        high=round_half_up(weather.temperature_max[day]),
        low=round_half_up(weather.temperature_min[day]),
        condition=classify_condition(
            reduced["precipitation"],
            reduced["precipitation_probability"],
            reduced["temperature"],
            reduced["cloud_cover"],
            is_daily=True,
        ),
        precipitation_probability=round_half_up(reduced["precipitation_probability"]),
        precipitation_amount=round_amount(reduced["precipitation"]),
        wind_speed=wind_speed_to_mph(reduced["wind_speed"]),
        wind_direction=wind_direction_bucket(reduced["wind_direction"]),
        uv_index=round_half_up(reduced["uv_index"]),
        aqi=air_quality.us_aqi[start],
        visibility=meters_to_miles(reduced["visibility"]),
        humidity=round_half_up(reduced["humidity"]),
        pressure=round_half_up(reduced["pressure"]),
    )


def _display_date(feed_date: str) -> str:
    """Shift the feed's daily date forward one day to the display convention."""
    return (date.fromisoformat(feed_date[:10]) + timedelta(days=1)).isoformat()
