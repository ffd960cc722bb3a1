import argparse
from dataclasses import dataclass

DEFAULT_RADIUS_KM = 6371.0
DEFAULT_PRECISION = -6


@dataclass
class GeoCalcConfig:
    """Configuration for the geocalc CLI."""

    radius: float = DEFAULT_RADIUS_KM
    precision: int = DEFAULT_PRECISION
    log_level: str = "WARNING"

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "GeoCalcConfig":
        return cls(
            radius=args.radius,
            precision=args.precision,
            log_level=args.log_level,
        )
