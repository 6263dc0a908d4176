"""FastAPI surface for rendering collaborators: radar frames, forecast, tiles, search."""

import logging

import httpx
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from skycast.config.schema import AppConfig
from skycast.forecast.aggregator import InsufficientDataError
from skycast.ingest.nominatim_client import NominatimClient
from skycast.ingest.open_meteo_client import OpenMeteoClient
from skycast.ingest.rainviewer_client import RainViewerClient
from skycast.pipeline.forecast_pipeline import ForecastPipeline
from skycast.pipeline.radar_pipeline import RadarPipeline
from skycast.radar.tiles import InvalidCoordinateError
from skycast.reporting.formatters import forecast_to_dict

logger = logging.getLogger(__name__)


def create_app(
    config: AppConfig | None = None,
    open_meteo: OpenMeteoClient | None = None,
    geocoder: NominatimClient | None = None,
    radar_feed: RainViewerClient | None = None,
) -> FastAPI:
    config = config or AppConfig()
    geocoder = geocoder or NominatimClient(config.ingest)
    forecasts = ForecastPipeline(config, open_meteo=open_meteo, geocoder=geocoder)
    radar = RadarPipeline(config, feed=radar_feed)

    app = FastAPI(title="skycast", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Data endpoints ──────────────────────────────────────────────

    @app.get("/api/radar")
    def get_radar():
        """Radar frames within the window around now, ascending."""
        try:
            frames = radar.fetch_frames()
        except Exception:
            logger.exception("Failed to fetch radar frames")
            return JSONResponse(
                {"error": "Failed to fetch radar frames"}, status_code=500
            )
        return [{"time": f.time, "path": f.path} for f in frames]

    @app.get("/api/forecast")
    def get_forecast(lat: float | None = None, lon: float | None = None):
        try:
            model = forecasts.run(lat, lon)
        except InsufficientDataError as e:
            raise HTTPException(422, str(e)) from e
        except httpx.HTTPError as e:
            raise HTTPException(502, f"Upstream feed error: {e}") from e
        return forecast_to_dict(model)

    @app.get("/api/tiles")
    def get_tiles(
        lat: float | None = None,
        lon: float | None = None,
        path: str | None = None,
        zoom: int | None = Query(None, ge=0, le=18),
    ):
        if lat is None or lon is None:
            lat = config.default_location.latitude
            lon = config.default_location.longitude
        try:
            grid = radar.grid(lat, lon, path, zoom)
        except InvalidCoordinateError as e:
            raise HTTPException(422, str(e)) from e
        return {
            "zoom": grid.zoom,
            "base": {"x": grid.base.x, "y": grid.base.y},
            "tiles": [{"x": t.x, "y": t.y} for t in grid.tiles],
            "base_map_urls": grid.base_map_urls(),
            "radar_urls": grid.tile_urls(),
        }

    @app.get("/api/search")
    def search(q: str):
        if len(q.strip()) <= 2:
            return []
        try:
            results = geocoder.search(q)
        except httpx.HTTPError as e:
            raise HTTPException(502, f"Geocoding failed: {e}") from e
        return [
            {
                "name": r.name,
                "latitude": r.latitude,
                "longitude": r.longitude,
                "country": r.country,
                "state": r.state,
            }
            for r in results
        ]

    return app
