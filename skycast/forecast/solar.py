"""Dawn, dusk and day/night length from a day's sunrise and sunset."""

from datetime import datetime, timedelta

from skycast.models.forecast import SunMoonWindow

TWILIGHT = timedelta(minutes=30)
FULL_DAY = timedelta(hours=24)


def parse_local_timestamp(value: str | datetime) -> datetime:
    """Parse a feed timestamp. No timezone conversion is applied."""
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def solar_window(sunrise: str | datetime, sunset: str | datetime) -> SunMoonWindow:
    """Build the solar window for one calendar day.

    Dawn and dusk are fixed 30-minute offsets from sunrise and sunset.
    Night length is whatever remains of 24 hours, so the two lengths always
    sum to exactly one day.
    """
    rise = parse_local_timestamp(sunrise)
    set_ = parse_local_timestamp(sunset)
    day_length = set_ - rise
    return SunMoonWindow(
        dawn=rise - TWILIGHT,
        sunrise=rise,
        sunset=set_,
        dusk=set_ + TWILIGHT,
        day_length=day_length,
        night_length=FULL_DAY - day_length,
    )
