"""Radar frame and map tile models."""

from collections.abc import Callable
from dataclasses import dataclass

from skycast.models.common import UnixTime


@dataclass(frozen=True)
class RadarFrame:
    time: UnixTime
    path: str


@dataclass(frozen=True)
class TileCoordinate:
    x: int
    y: int


@dataclass(frozen=True)
class TileGrid:
    zoom: int
    tiles: tuple[TileCoordinate, ...]  # top-left, top-right, bottom-left, bottom-right
    base: TileCoordinate
    base_map_url: Callable[[int, int], str]
    url: Callable[[int, int], str] | None = None
    snapshot_path: str | None = None

    def tile_urls(self) -> list[str]:
        """Radar URLs for every tile in grid order. Empty without a snapshot path."""
        if self.url is None:
            return []
        return [self.url(t.x, t.y) for t in self.tiles]

    def base_map_urls(self) -> list[str]:
        return [self.base_map_url(t.x, t.y) for t in self.tiles]
