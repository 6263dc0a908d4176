"""CLI entry point for the skycast forecast and radar pipeline."""

import argparse
import json
import logging
import os
import time
from pathlib import Path

import httpx
from pydantic import ValidationError

from skycast.config.defaults import default_location
from skycast.config.loader import get_config_value, load_config, set_config_value
from skycast.config.schema import AppConfig
from skycast.forecast.aggregator import InsufficientDataError
from skycast.ingest.nominatim_client import NominatimClient
from skycast.pipeline.forecast_pipeline import ForecastPipeline
from skycast.pipeline.radar_pipeline import RadarPipeline, RadarView
from skycast.radar.tiles import InvalidCoordinateError
from skycast.reporting.formatters import (
    format_forecast_json,
    format_forecast_text,
    format_frames_json,
    format_radar_time,
)

DEFAULT_CONFIG = "skycast.yaml"

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="skycast",
        description="Weather forecast aggregation and radar tile pipeline",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument(
        "--locale",
        help="Locale for default display units when the config sets none "
        "(defaults to $LANG)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # forecast
    fc_p = sub.add_parser("forecast", help="Aggregate and print a forecast")
    fc_p.add_argument("--lat", type=float)
    fc_p.add_argument("--lon", type=float)
    fc_p.add_argument("--weather-file", help="Saved forecast payload (JSON)")
    fc_p.add_argument("--air-file", help="Saved air-quality payload (JSON)")
    fc_p.add_argument("--json", action="store_true", help="JSON output")

    # radar
    radar_p = sub.add_parser("radar", help="Show windowed radar frames")
    radar_p.add_argument("--lat", type=float)
    radar_p.add_argument("--lon", type=float)
    radar_p.add_argument("--json", action="store_true", help="JSON output")
    radar_p.add_argument(
        "--watch", action="store_true",
        help="Refresh every radar.refresh_interval_seconds until interrupted",
    )

    # tiles
    tiles_p = sub.add_parser("tiles", help="Show the 2x2 tile grid for a point")
    tiles_p.add_argument("--lat", type=float, required=True)
    tiles_p.add_argument("--lon", type=float, required=True)
    tiles_p.add_argument("--zoom", type=int)
    tiles_p.add_argument("--path", help="Radar snapshot path")

    # search
    search_p = sub.add_parser("search", help="Geocode a place name or ZIP code")
    search_p.add_argument("query")

    # config show / get
    config_p = sub.add_parser("config", help="Inspect the effective config")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Get a config value")
    get_p.add_argument("key")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host", default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8777)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config, args.locale or os.environ.get("LANG"))
        if args.command == "forecast":
            return _cmd_forecast(config, args)
        elif args.command == "radar":
            return _cmd_radar(config, args)
        elif args.command == "tiles":
            return _cmd_tiles(config, args)
        elif args.command == "search":
            return _cmd_search(config, args)
        elif args.command == "config":
            return _cmd_config(config, args)
        elif args.command == "serve":
            return _cmd_serve(config, args)
        else:
            parser.print_help()
            return 1
    except (
        InsufficientDataError,
        InvalidCoordinateError,
        ValidationError,
        httpx.HTTPError,
    ) as e:
        print(f"Error: {e}")
        return 1


def _load_json(path: str) -> dict:
    with open(Path(path)) as f:
        return json.load(f)


def _cmd_forecast(config: AppConfig, args) -> int:
    pipeline = ForecastPipeline(config)
    if args.weather_file or args.air_file:
        if not (args.weather_file and args.air_file):
            print("Error: --weather-file and --air-file must be given together")
            return 1
        location = default_location(config)
        if args.lat is not None and args.lon is not None:
            location = pipeline.geocoder.reverse(args.lat, args.lon)
        model = pipeline.build(
            location, _load_json(args.weather_file), _load_json(args.air_file)
        )
    else:
        model = pipeline.run(args.lat, args.lon)

    if args.json:
        print(format_forecast_json(model))
    else:
        print(format_forecast_text(model, config.units))
    return 0


def _cmd_radar(config: AppConfig, args) -> int:
    pipeline = RadarPipeline(config)
    interval = config.radar.refresh_interval_seconds
    try:
        while True:
            try:
                view = pipeline.run(args.lat, args.lon)
            except httpx.HTTPError as e:
                if not args.watch:
                    raise
                logger.warning("Radar refresh failed, retrying in %ds: %s", interval, e)
            else:
                _print_radar(view, config, args.json)
            if not args.watch:
                return 0
            time.sleep(interval)
    except KeyboardInterrupt:
        logger.info("Radar watch interrupted")
        return 0


def _print_radar(view: RadarView, config: AppConfig, as_json: bool) -> None:
    if as_json:
        print(format_frames_json(view.frames))
        return
    if not view.frames:
        print("No radar data available")
        return
    for frame, grid in zip(view.frames, view.frame_grids, strict=True):
        label = format_radar_time(frame.time, config.units.time_format)
        print(f"{label:>8}  {grid.tile_urls()[0]}")


def _cmd_tiles(config: AppConfig, args) -> int:
    if args.zoom is not None:
        config = set_config_value(config, "radar.zoom", args.zoom)
    grid = RadarPipeline(config).grid(args.lat, args.lon, args.path)
    print(f"Zoom: {grid.zoom} | Base tile: {grid.base.x},{grid.base.y}")
    radar_urls = grid.tile_urls()
    for i, tile in enumerate(grid.tiles):
        print(f"  {tile.x},{tile.y}  {grid.base_map_url(tile.x, tile.y)}")
        if radar_urls:
            print(f"           {radar_urls[i]}")
    return 0


def _cmd_search(config: AppConfig, args) -> int:
    results = NominatimClient(config.ingest).search(args.query)
    if not results:
        print("No locations found")
        return 1
    for loc in results:
        region = f"{loc.state}, {loc.country}" if loc.state else loc.country
        print(f"{loc.name}, {region} ({loc.latitude:.4f}, {loc.longitude:.4f})")
    return 0


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            print(get_config_value(config, args.key))
            return 0
        except (KeyError, AttributeError) as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config get key")
        return 1


def _cmd_serve(config: AppConfig, args) -> int:
    import uvicorn

    from skycast.api import create_app

    uvicorn.run(create_app(config), host=args.host, port=args.port)
    return 0
