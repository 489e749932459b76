#!/usr/bin/env python3
"""Estimate a single fare from rule and zone files.

Usage:
    fare-estimate --rules rules.json --zones zones.geojson \\
        --pickup 55.27,25.20 --dropoff 55.30,25.25 --vehicle-class sedan \\
        --distance-km 8.4 --duration-min 17 --at 2024-03-04T08:15:00+04:00

    fare-estimate --rules rules.json --zones zones.geojson \\
        --pickup 55.27,25.20 --dropoff 55.30,25.25 --vehicle-class sedan \\
        --straight-line --off-peak
"""

import argparse
import json
import logging
import sys
from datetime import datetime

from pydantic import ValidationError

from fare_engine.core.exceptions import FareEngineError
from fare_engine.estimator import FareEstimator
from fare_engine.fare_logging import setup_logging
from fare_engine.geo.polygon import Coordinate
from fare_engine.routing import OSRMRoutingProvider, StraightLineRoutingProvider
from fare_engine.settings import get_settings
from fare_engine.store import load_fare_rules, load_zones
from fare_engine.trip import TripContext

logger = logging.getLogger(__name__)

EXIT_INPUT_ERROR = 2


def parse_coordinate(value: str) -> Coordinate:
    """Parse ``LNG,LAT`` into a (lng, lat) tuple."""
    try:
        lng, lat = (float(part) for part in value.split(","))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Expected LNG,LAT, got {value!r}") from e
    return lng, lat


def parse_instant(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Expected an ISO 8601 instant, got {value!r}") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Estimate a ride fare from rules and zones")
    parser.add_argument("--rules", required=True, help="JSON array of fare rule documents")
    parser.add_argument(
        "--zones", required=True, help="GeoJSON FeatureCollection or JSON array of zones"
    )
    parser.add_argument("--pickup", required=True, type=parse_coordinate, help="LNG,LAT")
    parser.add_argument("--dropoff", required=True, type=parse_coordinate, help="LNG,LAT")
    parser.add_argument("--vehicle-class", required=True, help="Vehicle class (taxi type) id")
    parser.add_argument("--trip-id", default=None, help="Id attached to log records")

    route = parser.add_mutually_exclusive_group(required=True)
    route.add_argument("--distance-km", type=float, help="Route distance in kilometers")
    route.add_argument(
        "--straight-line",
        action="store_true",
        help="Estimate distance and duration from great-circle distance",
    )
    route.add_argument(
        "--osrm", action="store_true", help="Fetch distance and duration from OSRM"
    )
    parser.add_argument(
        "--duration-min",
        type=float,
        default=None,
        help="Route duration in minutes (required with --distance-km)",
    )

    timing = parser.add_mutually_exclusive_group()
    timing.add_argument("--at", type=parse_instant, help="ISO 8601 request instant")
    timing.add_argument("--peak", dest="is_peak_hour", action="store_true", default=None)
    timing.add_argument("--off-peak", dest="is_peak_hour", action="store_false")
    parser.set_defaults(is_peak_hour=None)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.distance_km is not None and args.duration_min is None:
        parser.error("--duration-min is required with --distance-km")
    if args.distance_km is None and args.duration_min is not None:
        parser.error("--duration-min can only be used with --distance-km")

    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        return EXIT_INPUT_ERROR

    setup_logging(
        level=settings.engine.log_level,
        json_output=settings.engine.log_format == "json",
    )

    estimator = FareEstimator(settings=settings.engine)

    try:
        rules = load_fare_rules(args.rules)
        zones = load_zones(args.zones)

        if args.distance_km is not None:
            trip = TripContext(
                pickup=args.pickup,
                dropoff=args.dropoff,
                distance_km=args.distance_km,
                duration_minutes=args.duration_min,
                vehicle_class_id=args.vehicle_class,
                requested_at=args.at,
                is_peak_hour=args.is_peak_hour,
                trip_id=args.trip_id,
            )
            breakdown = estimator.estimate(trip, rules, zones)
        else:
            if args.osrm:
                router = OSRMRoutingProvider(
                    settings.routing.osrm_base_url, timeout=settings.routing.timeout_seconds
                )
            else:
                router = StraightLineRoutingProvider(settings.routing.average_speed_kmh)
            breakdown = estimator.quote(
                args.pickup,
                args.dropoff,
                args.vehicle_class,
                rules,
                zones,
                router,
                requested_at=args.at,
                is_peak_hour=args.is_peak_hour,
            )
    except FareEngineError as e:
        logger.error(f"{type(e).__name__}: {e.message}")
        return EXIT_INPUT_ERROR
    except (OSError, ValueError) as e:
        logger.error(f"Could not read input: {e}")
        return EXIT_INPUT_ERROR

    print(json.dumps(breakdown.model_dump(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
