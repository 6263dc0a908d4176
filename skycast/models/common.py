"""Common types and helpers shared across models."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TypeAlias

UnixTime: TypeAlias = int


@dataclass(frozen=True)
class Location:
    name: str
    latitude: float
    longitude: float
    country: str
    state: str | None = None


def utc_now() -> datetime:
    return datetime.now(UTC)


def unix_now() -> UnixTime:
    return int(utc_now().timestamp())
