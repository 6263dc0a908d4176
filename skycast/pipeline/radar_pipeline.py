"""Radar pipeline: fetch frames, window them, georeference the tiles."""

import logging
from dataclasses import dataclass

from skycast.config.schema import AppConfig
from skycast.ingest.rainviewer_client import RainViewerClient
from skycast.models.common import UnixTime, unix_now
from skycast.models.radar import RadarFrame, TileGrid
from skycast.radar.frames import select_frames
from skycast.radar.tiles import build_tile_grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RadarView:
    frames: list[RadarFrame]
    base_grid: TileGrid
    frame_grids: list[TileGrid]


class RadarPipeline:
    def __init__(self, config: AppConfig, feed: RainViewerClient | None = None):
        self.config = config
        self.feed = feed or RainViewerClient(config.ingest)

    def fetch_frames(self, now: UnixTime | None = None) -> list[RadarFrame]:
        """Fetch both frame sequences and keep those inside the window."""
        if now is None:
            now = unix_now()
        past, nowcast = self.feed.get_frames()
        return select_frames(
            past, nowcast, now, window_seconds=self.config.radar.window_seconds
        )

    def grid(
        self,
        lat: float,
        lon: float,
        path: str | None = None,
        zoom: int | None = None,
    ) -> TileGrid:
        """Tile grid at the configured zoom unless ``zoom`` overrides it."""
        radar = self.config.radar
        return build_tile_grid(
            lat,
            lon,
            zoom=radar.zoom if zoom is None else zoom,
            path=path,
            tile_size=radar.tile_size,
            tile_host=radar.tile_host,
            color_scheme=radar.color_scheme,
            options=radar.options,
            base_map_url=radar.base_map_url,
        )

    def run(
        self,
        lat: float | None = None,
        lon: float | None = None,
        now: UnixTime | None = None,
    ) -> RadarView:
        if lat is None or lon is None:
            lat = self.config.default_location.latitude
            lon = self.config.default_location.longitude

        base_grid = self.grid(lat, lon)
        frames = self.fetch_frames(now)
        frame_grids = [self.grid(lat, lon, frame.path) for frame in frames]
        logger.info(
            "Radar view at zoom %d: %d frames", base_grid.zoom, len(frames)
        )
        return RadarView(frames=frames, base_grid=base_grid, frame_grids=frame_grids)
