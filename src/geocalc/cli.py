#!/usr/bin/env python3
"""
Command line front end for geocalc.

Runs a single calculation from an origin point and prints the result as
JSON, for example:

    geocalc --lat 40.417875 --lon -3.710205 distance --to 40.422371 -3.704298
"""

from typing import Any, Callable, Dict, List, Optional
import argparse
import json
import logging
import sys

from . import __version__
from .calc import GeoCalc
from .config import DEFAULT_PRECISION, DEFAULT_RADIUS_KM, GeoCalcConfig
from .geometry import PointValidationError

# Configure logging
logger = logging.getLogger("geocalc")


def _add_to_argument(parser: argparse.ArgumentParser, help_text: str) -> None:
    parser.add_argument(
        "--to",
        type=float,
        nargs=2,
        metavar=("LAT", "LON"),
        required=True,
        help=help_text,
    )


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Spherical earth distance, bearing and position calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--lat", type=float, required=True, help="Origin latitude in degrees"
    )
    parser.add_argument(
        "--lon", type=float, required=True, help="Origin longitude in degrees"
    )
    parser.add_argument(
        "--radius",
        type=float,
        default=DEFAULT_RADIUS_KM,
        help=f"Earth radius in km (default: {DEFAULT_RADIUS_KM:g})",
    )
    parser.add_argument(
        "--precision",
        type=int,
        default=DEFAULT_PRECISION,
        help=f"Rounding precision, -6 keeps 6 decimals (default: {DEFAULT_PRECISION})",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"geocalc {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in [
        ("distance", "Great-circle distance to a point in km"),
        ("bearing", "Initial great-circle bearing to a point"),
        ("final-bearing", "Final great-circle bearing to a point"),
        ("midpoint", "Great-circle midpoint between origin and a point"),
        ("rhumb-distance", "Rhumb line distance to a point in km"),
        ("rhumb-bearing", "Rhumb line bearing to a point"),
    ]:
        sub = subparsers.add_parser(name, help=help_text)
        _add_to_argument(sub, "Destination point")

    for name, help_text in [
        ("destination", "Point reached along a great circle"),
        ("rhumb-destination", "Point reached along a rhumb line"),
    ]:
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--bearing", type=float, required=True, help="Bearing in degrees")
        sub.add_argument("--distance", type=float, required=True, help="Distance in km")

    bbox = subparsers.add_parser("bbox", help="Bounding box centred on the origin")
    bbox.add_argument("--width", type=float, required=True, help="Box width in km")
    bbox.add_argument(
        "--height",
        type=float,
        default=None,
        help="Box height in km (default: same as width)",
    )

    intersection = subparsers.add_parser(
        "intersection", help="Intersection of two paths given by point and bearing"
    )
    intersection.add_argument(
        "--bearing1", type=float, required=True, help="Bearing from the origin in degrees"
    )
    _add_to_argument(intersection, "Start point of the second path")
    intersection.add_argument(
        "--bearing2",
        type=float,
        required=True,
        help="Bearing from the second point in degrees",
    )

    return parser


def setup_logging(config: GeoCalcConfig) -> None:
    """Setup logging configuration."""
    level = getattr(logging, config.log_level)

    # Create formatter
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    # Create console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Configure the root logger so all modules inherit the configuration
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    # repeated main() calls in one process share the first handler
    if not root_logger.handlers:
        root_logger.addHandler(console_handler)


def run_command(calc: GeoCalc, args: argparse.Namespace, precision: int) -> Any:
    """
    Dispatch a parsed subcommand to the matching GeoCalc operation.

    Args:
        calc: Calculator bound to the origin point
        args: Parsed command-line arguments
        precision: Rounding precision for the result

    Returns:
        The operation result (string, dict or None)
    """
    point_commands: Dict[str, Callable[..., Any]] = {
        "distance": calc.distance_to,
        "bearing": calc.bearing_to,
        "final-bearing": calc.final_bearing_to,
        "midpoint": calc.midpoint_to,
        "rhumb-distance": calc.rhumb_distance_to,
        "rhumb-bearing": calc.rhumb_bearing_to,
    }
    if args.command in point_commands:
        return point_commands[args.command](tuple(args.to), precision)

    if args.command == "destination":
        return calc.destination_point(args.bearing, args.distance, precision)
    if args.command == "rhumb-destination":
        return calc.rhumb_destination_point(args.bearing, args.distance, precision)
    if args.command == "bbox":
        return calc.boundry_box(args.width, args.height, precision)
    if args.command == "intersection":
        return calc.intersection(args.bearing1, tuple(args.to), args.bearing2, precision)

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> None:
    """
    Parses command-line arguments, runs the requested calculation and
    prints the result as JSON.
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    config = GeoCalcConfig.from_args(args)

    # Setup logging
    setup_logging(config)

    try:
        calc = GeoCalc(args.lat, args.lon, radius=config.radius)
        result = run_command(calc, args, config.precision)
    except PointValidationError as e:
        logger.error(f"Invalid input: {e}")
        sys.exit(1)

    logger.debug(f"{args.command} from {calc!r}: {result}")
    if result is None:
        logger.info("Paths have no unique intersection")

    print(json.dumps({"result": result}))


if __name__ == "__main__":
    main()
