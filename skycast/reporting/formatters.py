"""Display formatting for forecast models and radar frames.

Core records are metric; unit preferences are applied here, at output time.
"""

import json
from dataclasses import asdict
from datetime import datetime, tzinfo
from typing import Any

from skycast.config.schema import PressureUnit, TemperatureUnit, TimeFormat, UnitsConfig
from skycast.forecast.units import convert_temperature, hpa_to_inhg
from skycast.models.forecast import Condition, ForecastModel, WindDirection
from skycast.models.radar import RadarFrame

CONDITION_SYMBOLS = {
    Condition.SNOW_HEAVY: "🌨️",
    Condition.RAIN_HEAVY: "⛈️",
    Condition.SNOW_LIGHT: "🌨️",
    Condition.RAIN_LIGHT: "🌧️",
    Condition.OVERCAST: "☁️",
    Condition.PARTLY_CLOUDY_DAY: "⛅",
    Condition.PARTLY_CLOUDY_NIGHT: "☁️",
    Condition.CLEAR_NIGHT: "🌙",
    Condition.CLEAR_DAY: "☀️",
}

WIND_ARROWS = {
    WindDirection.N: "⬆️",
    WindDirection.NE: "↗️",
    WindDirection.E: "➡️",
    WindDirection.SE: "↘️",
    WindDirection.S: "⬇️",
    WindDirection.SW: "↙️",
    WindDirection.W: "⬅️",
    WindDirection.NW: "↖️",
}


def format_temperature(temp_c: float, unit: TemperatureUnit) -> str:
    return f"{convert_temperature(temp_c, unit.value)}°{unit.value}"


def convert_pressure(pressure_hpa: float, unit: PressureUnit) -> str:
    if unit == PressureUnit.INCHES_HG:
        return f"{hpa_to_inhg(pressure_hpa):.2f}"
    return str(pressure_hpa)


def _clock(hour: int, minute: int, time_format: TimeFormat) -> str:
    if time_format == TimeFormat.TWELVE_HOUR:
        suffix = "AM" if hour < 12 else "PM"
        return f"{hour % 12 or 12}:{minute:02d} {suffix}"
    return f"{hour:02d}:{minute:02d}"


def format_hour(hour: int, time_format: TimeFormat) -> str:
    """Render an hour-of-day as ``3:00 PM`` or ``15:00``."""
    return _clock(hour % 24, 0, time_format)


def format_radar_time(
    timestamp: int, time_format: TimeFormat, tz: tzinfo | None = None
) -> str:
    """Clock label for a frame; ``tz=None`` renders in the viewer's local zone."""
    moment = datetime.fromtimestamp(timestamp, tz=tz)
    return _clock(moment.hour, moment.minute, time_format)


def forecast_to_dict(model: ForecastModel) -> dict[str, Any]:
    """Plain JSON-ready representation of a ForecastModel."""
    sun = model.sun_moon
    return {
        "location": asdict(model.location),
        "current": asdict(model.current),
        "hourly": [asdict(h) for h in model.hourly],
        "daily": [asdict(d) for d in model.daily],
        "sun_moon": {
            "dawn": sun.dawn.isoformat(),
            "sunrise": sun.sunrise.isoformat(),
            "sunset": sun.sunset.isoformat(),
            "dusk": sun.dusk.isoformat(),
            "day_length": sun.day_length_label,
            "night_length": sun.night_length_label,
        },
    }


def format_forecast_json(model: ForecastModel) -> str:
    return json.dumps(forecast_to_dict(model), indent=2, ensure_ascii=False)


def format_forecast_text(model: ForecastModel, units: UnitsConfig) -> str:
    """Plain text forecast report in the caller's display units."""
    loc = model.location
    place = ", ".join(p for p in (loc.name, loc.state, loc.country) if p)
    cur = model.current
    sun = model.sun_moon
    lines = [
        f"=== {place} ===",
        f"Now: {format_temperature(cur.temperature, units.temperature)} "
        f"{CONDITION_SYMBOLS[cur.condition]} {cur.condition.value}",
        f"Precip: {cur.precipitation_probability}% ({cur.precipitation_amount:.2f} mm) | "
        f"Wind: {cur.wind_speed} mph {WIND_ARROWS[cur.wind_direction]} | "
        f"UV: {cur.uv_index} | AQI: {cur.aqi if cur.aqi is not None else 'n/a'}",
        f"Visibility: {cur.visibility} mi | Humidity: {cur.humidity}% | "
        f"Pressure: {convert_pressure(cur.pressure, units.pressure)} {units.pressure.value}",
        f"Sunrise {_clock(sun.sunrise.hour, sun.sunrise.minute, units.time_format)} | "
        f"Sunset {_clock(sun.sunset.hour, sun.sunset.minute, units.time_format)} | "
        f"Day {sun.day_length_label} | Night {sun.night_length_label}",
        "",
        "Hourly:",
    ]
    for h in model.hourly:
        lines.append(
            f"  {format_hour(h.hour, units.time_format):>8} "
            f"{format_temperature(h.temperature, units.temperature):>6} "
            f"{CONDITION_SYMBOLS[h.condition]} {h.precipitation_probability:>3}%"
        )
    lines.append("")
    lines.append("Daily:")
    for d in model.daily:
        lines.append(
            f"  {d.date} "
            f"{format_temperature(d.high, units.temperature)}/"
            f"{format_temperature(d.low, units.temperature)} "
            f"{CONDITION_SYMBOLS[d.condition]} {d.precipitation_probability}%"
        )
    return "\n".join(lines)


def format_frames_json(frames: list[RadarFrame]) -> str:
    return json.dumps([asdict(f) for f in frames], indent=2)
