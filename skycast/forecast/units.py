"""Unit conversions and wind-direction bucketing for feed values."""

import math
from decimal import ROUND_HALF_UP, Decimal

from skycast.models.forecast import WindDirection

# The feed's default wind unit is km/h; this factor yields mph.
WIND_SPEED_TO_MPH = 0.621371
METERS_TO_MILES = 0.000621371
HPA_PER_INHG = 33.86389

_COMPASS = [
    WindDirection.N,
    WindDirection.NE,
    WindDirection.E,
    WindDirection.SE,
    WindDirection.S,
    WindDirection.SW,
    WindDirection.W,
    WindDirection.NW,
]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward +infinity.

    Python's round() uses banker's rounding; feed consumers expect 2.5 -> 3
    and -2.5 -> -2.
    """
    return math.floor(value + 0.5)


def round_amount(value: float, places: int = 2) -> float:
    """Fix a precipitation amount to ``places`` decimals, ties away from zero.

    Works on the exact binary value, so 0.125 -> 0.13 while 1.005 (stored as
    1.00499...) -> 1.0.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def celsius_to_fahrenheit(temp_c: float) -> float:
    return temp_c * 9 / 5 + 32


def convert_temperature(temp_c: float, unit: str) -> float:
    """Convert a Celsius value to the display unit.

    Fahrenheit results are rounded to whole degrees; Celsius passes through.
    """
    if unit == "F":
        return round_half_up(celsius_to_fahrenheit(temp_c))
    return temp_c


def hpa_to_inhg(pressure_hpa: float) -> float:
    return pressure_hpa / HPA_PER_INHG


def wind_speed_to_mph(speed: float) -> int:
    return round_half_up(speed * WIND_SPEED_TO_MPH)


def meters_to_miles(distance_m: float) -> int:
    return round_half_up(distance_m * METERS_TO_MILES)


def wind_direction_bucket(degrees: float) -> WindDirection:
    """Bucket a bearing into one of eight 45-degree compass sectors."""
    return _COMPASS[round_half_up(degrees / 45) % 8]
