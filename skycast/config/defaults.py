"""Default location and locale-derived unit preferences."""

from skycast.config.schema import (
    AppConfig,
    PressureUnit,
    TemperatureUnit,
    TimeFormat,
    UnitsConfig,
)
from skycast.models.common import Location

US_LOCALE = "en-US"

US_UNITS = UnitsConfig(
    temperature=TemperatureUnit.FAHRENHEIT,
    time_format=TimeFormat.TWELVE_HOUR,
    pressure=PressureUnit.INCHES_HG,
)
METRIC_UNITS = UnitsConfig()


def normalize_locale(locale: str) -> str:
    """Map a POSIX locale such as ``en_US.UTF-8`` to the tag form ``en-US``."""
    return locale.split(".", 1)[0].split("@", 1)[0].replace("_", "-")


def default_units_for_locale(locale: str | None) -> UnitsConfig:
    """US customary units for ``en-US``, metric with 24-hour time otherwise."""
    if locale and normalize_locale(locale) == US_LOCALE:
        return US_UNITS
    return METRIC_UNITS


def default_location(config: AppConfig) -> Location:
    loc = config.default_location
    return Location(
        name=loc.name,
        latitude=loc.latitude,
        longitude=loc.longitude,
        country=loc.country,
        state=loc.state,
    )
