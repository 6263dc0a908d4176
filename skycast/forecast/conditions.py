"""Rule-based weather condition classification."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from skycast.models.forecast import Condition, SunMoonWindow

HEAVY_PRECIP_MM = 1.0
HEAVY_PRECIP_PROB = 50
STORM_PRECIP_PROB = 70
LIGHT_PRECIP_MM = 0.1
LIGHT_PRECIP_PROB = 30
OVERCAST_CLOUD = 80
PARTLY_CLOUDY_CLOUD = 30
FREEZING_C = 0


@dataclass(frozen=True)
class Reading:
    precipitation: float
    probability: float
    temperature: float
    cloud_cover: float
    is_night: bool


def _heavy_precip(r: Reading) -> Condition | None:
    if r.precipitation >= HEAVY_PRECIP_MM or r.probability >= HEAVY_PRECIP_PROB:
        if r.temperature < FREEZING_C:
            return Condition.SNOW_HEAVY
        if r.probability >= STORM_PRECIP_PROB:
            return Condition.RAIN_HEAVY
        return Condition.RAIN_LIGHT
    return None


def _light_precip(r: Reading) -> Condition | None:
    if r.precipitation >= LIGHT_PRECIP_MM or r.probability >= LIGHT_PRECIP_PROB:
        if r.temperature < FREEZING_C:
            return Condition.SNOW_LIGHT
        return Condition.RAIN_LIGHT
    return None


def _overcast(r: Reading) -> Condition | None:
    if r.cloud_cover >= OVERCAST_CLOUD:
        return Condition.OVERCAST
    return None


def _partly_cloudy(r: Reading) -> Condition | None:
    if r.cloud_cover >= PARTLY_CLOUDY_CLOUD:
        return Condition.PARTLY_CLOUDY_NIGHT if r.is_night else Condition.PARTLY_CLOUDY_DAY
    return None


def _clear(r: Reading) -> Condition:
    return Condition.CLEAR_NIGHT if r.is_night else Condition.CLEAR_DAY


# Order matters: a reading that satisfies several rules takes the first.
RULES: list[Callable[[Reading], Condition | None]] = [
    _heavy_precip,
    _light_precip,
    _overcast,
    _partly_cloudy,
    _clear,
]


def classify_condition(
    precipitation: float,
    probability: float,
    temperature: float,
    cloud_cover: float,
    is_night: bool = False,
    is_daily: bool = False,
) -> Condition:
    """Classify one hour (or one aggregated day) into a Condition.

    Args:
        precipitation: Precipitation amount in mm/h.
        probability: Precipitation probability in percent.
        temperature: Air temperature in degrees C.
        cloud_cover: Cloud cover in percent.
        is_night: Whether the reading falls outside the dawn-dusk window.
        is_daily: Daily aggregates never take a night variant.

    Returns:
        The first Condition whose rule matches.
    """
    reading = Reading(
        precipitation=precipitation,
        probability=probability,
        temperature=temperature,
        cloud_cover=cloud_cover,
        is_night=is_night and not is_daily,
    )
    for rule in RULES:
        condition = rule(reading)
        if condition is not None:
            return condition
    raise AssertionError("unreachable: clear rule always matches")


def is_night_at(moment: datetime, window: SunMoonWindow) -> bool:
    """Strictly before dawn or strictly after dusk."""
    return moment < window.dawn or moment > window.dusk
