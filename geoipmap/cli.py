"""Command-line front end.

    geoipmap locate 8.8.8.8 example.org
    geoipmap trace example.org
    geoipmap render 8.8.8.8 1.1.1.1 --output map.png --map-image world.jpg
    geoipmap render --trace example.org --output path.html --html
    geoipmap flush-cache

The locator chain is always disposed before exiting so the geo-location
cache gets persisted.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from . import __version__
from .config import AppConfig, get_config
from .container import Container
from .domain.errors import GeoIPMapError
from .domain.models import GeoLocation
from .logging_config import configure_logging
from .services import GeoMapService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geoipmap", description="Geo-locate IP addresses and draw them on a world map."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", help="Override the configured log level")
    parser.add_argument(
        "--no-cache", action="store_true", help="Do not read or write the persistent cache"
    )
    parser.add_argument("--map-image", type=Path, help="World map image to draw on")
    parser.add_argument("--map-kind", choices=["miller", "robinson"], help="Projection of the map image")

    commands = parser.add_subparsers(dest="command", required=True)

    locate = commands.add_parser("locate", help="Print the location of each subject")
    locate.add_argument("subjects", nargs="+", metavar="SUBJECT")

    trace = commands.add_parser("trace", help="Trace the path to a host and locate each hop")
    trace.add_argument("host")

    render = commands.add_parser("render", help="Draw subjects or a traced path on a map")
    render.add_argument("subjects", nargs="*", metavar="SUBJECT")
    render.add_argument("--trace", dest="trace_host", metavar="HOST", help="Draw the path to HOST")
    render.add_argument("--output", "-o", type=Path, required=True)
    render.add_argument("--html", action="store_true", help="Write an interactive HTML map")

    commands.add_parser("flush-cache", help="Discard the persistent geo-location cache")
    return parser


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Return ``config`` with command-line overrides applied."""
    updates: Dict[str, Any] = {}
    if args.log_level:
        updates["observability"] = config.observability.model_copy(
            update={"level": args.log_level}
        )
    if args.no_cache:
        updates["cache"] = config.cache.model_copy(update={"enabled": False})
    map_updates: Dict[str, Any] = {}
    if args.map_image is not None:
        map_updates["image_path"] = args.map_image
    if args.map_kind is not None:
        map_updates["kind"] = args.map_kind
    if map_updates:
        updates["map"] = config.map.model_copy(update=map_updates)
    return config.model_copy(update=updates) if updates else config


def format_location(location: GeoLocation) -> str:
    if not location.is_valid:
        return f"{location.subject}\tunlocatable"
    city = location.parameter(GeoLocation.KEY_CITY, "")
    country = location.parameter(GeoLocation.KEY_COUNTRY, "")
    place = ", ".join(part for part in (city, country) if part)
    return f"{location.subject}\t{location.latitude:.4f}\t{location.longitude:.4f}\t{place}"


def _print_locations(locations: Sequence[GeoLocation]) -> None:
    for location in locations:
        print(format_location(location))


def run(service: GeoMapService, args: argparse.Namespace) -> int:
    if args.command == "locate":
        _print_locations(service.locate(args.subjects))
    elif args.command == "trace":
        locations = service.trace(
            args.host, on_hop=lambda hop: logger.info("Hop discovered", extra={"hop": hop})
        )
        _print_locations(locations)
    elif args.command == "render":
        if args.trace_host:
            locations = service.trace(args.trace_host)
            locations += service.locate(args.subjects) if args.subjects else []
            connect = True
        else:
            locations = service.locate(args.subjects)
            connect = False
        path = service.render(locations, args.output, connect=connect, html=args.html)
        print(path)
    elif args.command == "flush-cache":
        service.flush_cache()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "render" and not args.subjects and not args.trace_host:
        parser.error("render needs at least one SUBJECT or --trace HOST")

    config = apply_overrides(get_config(), args)
    configure_logging(config.observability)

    service: Optional[GeoMapService] = None
    exit_code = 1
    try:
        service = Container.create_default(config).resolve(GeoMapService)
        exit_code = run(service, args)
    except GeoIPMapError as e:
        print(f"error: {e}", file=sys.stderr)
    finally:
        if service is not None:
            try:
                service.dispose()
            except GeoIPMapError as e:
                print(f"error: {e}", file=sys.stderr)
                exit_code = 1
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
