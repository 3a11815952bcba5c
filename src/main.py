"""Command-Line Entry Point.

This module provides the command-line client for the hazard aggregation
engine. It's a thin wrapper that loads configuration, resolves a location,
and invokes the aggregator or the alert client.

Usage:
    python main.py hazards --lat 34.0754 --lon -84.2941 --radius 150
    python main.py hazards --locate
    python main.py alerts --level emergency
    python main.py locate
    python main.py set-location 34.0754 -84.2941
"""

import argparse
import logging
import os
import sys

import yaml

from src.aggregator import Aggregator
from src.core.alerts import CommunityAlert, filter_by_level
from src.core.config import Config, validate_config, validate_coordinates
from src.core.errors import AggregateFailure, GeolocationError
from src.core.events import HazardEvent
from src.core.geo import Coordinate, format_distance
from src.core.severity import Severity
from src.shell.config_loader import load_config
from src.shell.geolocation_client import IPGeolocationClient
from src.shell.location_provider import LocationProvider
from src.shell.location_store import LocationStore
from src.shell.nws_client import CommunityAlertClient


logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure logging from the LOG_LEVEL environment variable."""
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_location_provider(config: Config) -> LocationProvider:
    """Create a location provider backed by the configured cache."""
    return LocationProvider(
        store=LocationStore(config.cache_path),
        geolocator=IPGeolocationClient(
            url=config.geolocation_url,
            timeout=config.geolocation_timeout,
            user_agent=config.feeds.user_agent,
        ),
    )


def format_event(event: HazardEvent) -> str:
    """One-line description of a hazard event."""
    distance = "?" if event.distance_km is None else format_distance(event.distance_km)
    magnitude = f" [{event.magnitude}]" if event.magnitude else ""
    return (
        f"{event.timestamp:%Y-%m-%d %H:%M}Z  {event.severity.value.upper():<9} "
        f"{event.source.value:<10} {distance:>8}  {event.title}{magnitude}"
    )


def format_alert(alert: CommunityAlert) -> str:
    """One-line description of a community alert."""
    return (
        f"{alert.updated:%Y-%m-%d %H:%M}Z  {alert.level.value.upper():<9} "
        f"{alert.headline} ({alert.area}, {alert.source})"
    )


def _manual_coordinate(latitude: float, longitude: float) -> Coordinate:
    """Build a coordinate from user input, rejecting out-of-range values."""
    coordinate = Coordinate.from_values(latitude, longitude)
    errors = validate_coordinates(coordinate.latitude, coordinate.longitude, "location")
    if errors:
        raise ValueError("; ".join(e.message for e in errors))
    return coordinate


def _resolve_reference(
    args: argparse.Namespace,
    provider: LocationProvider,
) -> Coordinate | None:
    if args.lat is not None or args.lon is not None:
        if args.lat is None or args.lon is None:
            raise ValueError("Both --lat and --lon are required for a manual location")
        provider.set_location(_manual_coordinate(args.lat, args.lon))
    elif args.locate or provider.coordinate is None:
        provider.request_location()
    return provider.coordinate


def run_hazards(args: argparse.Namespace, config: Config) -> int:
    """Aggregate and print nearby hazard events."""
    provider = build_location_provider(config)

    try:
        reference = _resolve_reference(args, provider)
    except GeolocationError as e:
        logger.error("Could not determine location: %s", e)
        print("Location unavailable. Pass --lat and --lon to set it manually.")
        return 1

    if reference is None:
        print("No location available. Pass --lat and --lon to set it manually.")
        return 1

    radius_km = args.radius if args.radius is not None else config.default_radius_km
    aggregator = Aggregator.from_config(config, timeout=args.timeout)

    try:
        result = aggregator.aggregate_with_report(reference, radius_km)
    except AggregateFailure as e:
        print(f"Unable to fetch hazards: {e}")
        return 1

    if not result.events:
        print("No recent hazards found within your selected radius.")
    for event in result.events:
        print(format_event(event))

    if result.partial:
        print(f"Warning: some sources were unavailable ({', '.join(result.failed_sources)})")

    return 0


def run_alerts(args: argparse.Namespace, config: Config) -> int:
    """Fetch and print community alerts."""
    client = CommunityAlertClient(
        feed_url=config.feeds.alert_feed_url,
        timeout=config.feeds.timeout_seconds,
        user_agent=config.feeds.user_agent,
        limit=config.feeds.alert_limit,
    )
    level = Severity(args.level) if args.level else None
    alerts = filter_by_level(client.fetch_alerts(), level)

    if not alerts:
        print("No alerts match this filter.")
    for alert in alerts:
        print(format_alert(alert))

    return 0


def run_locate(args: argparse.Namespace, config: Config) -> int:
    """Resolve and cache the current location."""
    provider = build_location_provider(config)
    try:
        coordinate = provider.request_location()
    except GeolocationError as e:
        print(f"Location unavailable: {e}")
        return 1

    if coordinate is None:
        print("Location request already in progress.")
        return 1

    print(f"{coordinate.latitude:.4f}, {coordinate.longitude:.4f}")
    return 0


def run_set_location(args: argparse.Namespace, config: Config) -> int:
    """Manually set and cache the location."""
    provider = build_location_provider(config)
    provider.set_location(_manual_coordinate(args.latitude, args.longitude))
    print(f"Location set to {args.latitude:.4f}, {args.longitude:.4f}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line argument parser."""
    parser = argparse.ArgumentParser(
        description="Nearby hazard events and community alerts",
    )
    parser.add_argument(
        "--config",
        help="Path to YAML config file (default: $CONFIG_PATH or config/config.yaml)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    hazards = subparsers.add_parser("hazards", help="List hazard events near you")
    hazards.add_argument("--lat", type=float, help="Reference latitude")
    hazards.add_argument("--lon", type=float, help="Reference longitude")
    hazards.add_argument("--radius", type=float, help="Search radius in km")
    hazards.add_argument(
        "--locate",
        action="store_true",
        help="Resolve the current location instead of using the cached one",
    )
    hazards.add_argument(
        "--timeout",
        type=float,
        help="Seconds to wait for each hazard source",
    )
    hazards.set_defaults(handler=run_hazards)

    alerts = subparsers.add_parser("alerts", help="List community alerts")
    alerts.add_argument(
        "--level",
        choices=[s.value for s in Severity],
        help="Only show alerts of this level",
    )
    alerts.set_defaults(handler=run_alerts)

    locate = subparsers.add_parser("locate", help="Resolve and cache your location")
    locate.set_defaults(handler=run_locate)

    set_location = subparsers.add_parser("set-location", help="Set your location manually")
    set_location.add_argument("latitude", type=float)
    set_location.add_argument("longitude", type=float)
    set_location.set_defaults(handler=run_set_location)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command-line client.

    Returns:
        Process exit code
    """
    configure_logging()
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except (ValueError, yaml.YAMLError) as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    validation = validate_config(config)
    for warning in validation.warnings:
        logger.warning("Config %s: %s", warning.field, warning.message)
    if not validation.valid:
        for error in validation.critical_errors:
            logger.error("Config %s: %s", error.field, error.message)
        return 2

    try:
        return args.handler(args, config)
    except ValueError as e:
        print(f"Error: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
