"""Web Mercator tile georeferencing and radar tile URL building.

Tile positions follow the standard slippy-map scheme. Longitudes are not
wrapped and latitudes are not clamped; coordinates must lie strictly inside
the Web Mercator latitude limit, where tan/sec stay finite.
"""

import math
from collections.abc import Callable

from skycast.models.radar import TileCoordinate, TileGrid

DEFAULT_ZOOM = 9
DEFAULT_TILE_SIZE = 256
DEFAULT_TILE_HOST = "https://tilecache.rainviewer.com"
DEFAULT_COLOR_SCHEME = 2
DEFAULT_OPTIONS = "1_1"
DEFAULT_BASE_MAP_URL = "https://tile.openstreetmap.org/{z}/{x}/{y}.png"
MAX_LATITUDE = 85.05112878


class InvalidCoordinateError(ValueError):
    """Raised for coordinates outside the range the tile math supports."""


def lat_lon_to_tile(lat: float, lon: float, zoom: int) -> tuple[float, float]:
    """Exact (fractional) tile position of a point at ``zoom``."""
    if not math.isfinite(lat) or not -MAX_LATITUDE < lat < MAX_LATITUDE:
        raise InvalidCoordinateError(
            f"latitude {lat} outside supported range ±{MAX_LATITUDE}"
        )
    if not math.isfinite(lon):
        raise InvalidCoordinateError(f"longitude {lon} is not finite")
    if zoom < 0:
        raise InvalidCoordinateError(f"zoom must be non-negative, got {zoom}")

    n = 2**zoom
    lat_rad = math.radians(lat)
    x = n * (lon + 180) / 360
    y = n * (1 - math.log(math.tan(lat_rad) + 1 / math.cos(lat_rad)) / math.pi) / 2
    return x, y


def centered_grid(x: float, y: float) -> tuple[TileCoordinate, tuple[TileCoordinate, ...]]:
    """Base tile and the 2x2 block whose center is nearest the point.

    On each axis the block extends toward the half of the base tile the point
    sits in: positive when the offset is above 0.5, negative otherwise.
    """
    base_x = math.floor(x)
    base_y = math.floor(y)
    left = base_x if x - base_x > 0.5 else base_x - 1
    top = base_y if y - base_y > 0.5 else base_y - 1
    tiles = (
        TileCoordinate(left, top),
        TileCoordinate(left + 1, top),
        TileCoordinate(left, top + 1),
        TileCoordinate(left + 1, top + 1),
    )
    return TileCoordinate(base_x, base_y), tiles


def radar_url_builder(
    path: str,
    zoom: int,
    tile_size: int = DEFAULT_TILE_SIZE,
    tile_host: str = DEFAULT_TILE_HOST,
    color_scheme: int = DEFAULT_COLOR_SCHEME,
    options: str = DEFAULT_OPTIONS,
) -> Callable[[int, int], str]:
    """Bind a radar snapshot path to a ``(x, y) -> url`` function."""
    prefix = f"{tile_host.rstrip('/')}{path}/{tile_size}/{zoom}"

    def build(x: int, y: int) -> str:
        return f"{prefix}/{x}/{y}/{color_scheme}/{options}.png"

    return build


def base_map_url_builder(
    zoom: int, template: str = DEFAULT_BASE_MAP_URL
) -> Callable[[int, int], str]:
    def build(x: int, y: int) -> str:
        return template.format(z=zoom, x=x, y=y)

    return build


def build_tile_grid(
    lat: float,
    lon: float,
    zoom: int = DEFAULT_ZOOM,
    path: str | None = None,
    tile_size: int = DEFAULT_TILE_SIZE,
    tile_host: str = DEFAULT_TILE_HOST,
    color_scheme: int = DEFAULT_COLOR_SCHEME,
    options: str = DEFAULT_OPTIONS,
    base_map_url: str = DEFAULT_BASE_MAP_URL,
) -> TileGrid:
    """Build the 2x2 tile grid around a point.

    Args:
        lat: Latitude in degrees, strictly inside ±85.05112878.
        lon: Longitude in degrees. Not wrapped.
        zoom: Slippy-map zoom level.
        path: Radar snapshot path. Without one only the base-map grid is
            returned and ``url`` is None.

    Raises:
        InvalidCoordinateError: If the latitude cannot be projected.
    """
    x, y = lat_lon_to_tile(lat, lon, zoom)
    base, tiles = centered_grid(x, y)
    url = None
    if path:
        url = radar_url_builder(
            path, zoom, tile_size=tile_size, tile_host=tile_host,
            color_scheme=color_scheme, options=options,
        )
    return TileGrid(
        zoom=zoom,
        tiles=tiles,
        base=base,
        base_map_url=base_map_url_builder(zoom, base_map_url),
        url=url,
        snapshot_path=path or None,
    )
