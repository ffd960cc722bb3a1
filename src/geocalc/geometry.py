"""
Point values and small angle helpers shared by the calculators.

This module provides the immutable GeoPoint value, the coercion used to
accept caller supplied points (GeoPoint, mappings or coordinate pairs),
and the radian normalization used when reporting computed longitudes.
"""

from dataclasses import dataclass
from decimal import Decimal
from collections.abc import Mapping, Sequence
from typing import Any, Union
import logging
import math

from .config import DEFAULT_RADIUS_KM

logger = logging.getLogger(__name__)

PointLike = Union["GeoPoint", Mapping[str, Any], Sequence[Any]]


class PointValidationError(ValueError):
    """Raised when a point or radius cannot be used for calculations."""

    pass


def _to_float(value: Any, field: str) -> float:
    """
    Convert a coordinate value to float.

    Numeric strings and Decimals are accepted so that formatted results can
    be passed back in as points.

    Args:
        value: The raw coordinate value
        field: Name of the field, used in error messages

    Returns:
        The value as a float

    Raises:
        PointValidationError: If the value is not numeric
    """
    if isinstance(value, bool):
        raise PointValidationError(f"{field} must be a number, got {value!r}")
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError as e:
            raise PointValidationError(
                f"{field} must be a number, got {value!r}"
            ) from e
    raise PointValidationError(
        f"{field} must be a number, got {type(value).__name__}"
    )


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees on a sphere of given radius."""

    lat: float
    lon: float
    radius: float = DEFAULT_RADIUS_KM

    def __post_init__(self) -> None:
        # frozen dataclass, so normalized values go through object.__setattr__
        lat = _to_float(self.lat, "lat")
        lon = _to_float(self.lon, "lon")
        radius = _to_float(self.radius, "radius")

        if not math.isfinite(radius) or radius <= 0:
            raise PointValidationError(
                f"radius must be a positive number of kilometers, got {radius}"
            )
        if not -90.0 <= lat <= 90.0:
            logger.warning(f"Latitude {lat} is outside the range [-90, 90]")
        if not -180.0 <= lon <= 180.0:
            logger.warning(f"Longitude {lon} is outside the range [-180, 180]")

        object.__setattr__(self, "lat", lat)
        object.__setattr__(self, "lon", lon)
        object.__setattr__(self, "radius", radius)


def to_point(point: PointLike, radius: float = DEFAULT_RADIUS_KM) -> GeoPoint:
    """
    Coerce a caller supplied point into a GeoPoint.

    Args:
        point: A GeoPoint, a mapping with "lat" and "lon" keys, or a
               (lat, lon) pair
        radius: Radius given to points built from mappings or pairs

    Returns:
        GeoPoint for the supplied coordinates

    Raises:
        PointValidationError: If the point is missing a coordinate or has
                              an unsupported shape
    """
    if isinstance(point, GeoPoint):
        return point

    if isinstance(point, Mapping):
        missing = [key for key in ("lat", "lon") if point.get(key) is None]
        if missing:
            raise PointValidationError(
                f"Point is missing required field(s): {', '.join(missing)}"
            )
        return GeoPoint(lat=point["lat"], lon=point["lon"], radius=radius)

    if isinstance(point, Sequence) and not isinstance(point, (str, bytes)):
        if len(point) != 2:
            raise PointValidationError(
                f"Coordinate pair must have exactly two values, got {len(point)}"
            )
        return GeoPoint(lat=point[0], lon=point[1], radius=radius)

    raise PointValidationError(
        f"Unsupported point type {type(point).__name__}; "
        f"expected GeoPoint, mapping or (lat, lon) pair"
    )


def normalize_radians(angle: float) -> float:
    """
    Normalize an angle in radians into the range (-pi, pi].

    Args:
        angle: Angle in radians

    Returns:
        Equivalent angle in (-pi, pi]; non-finite input is returned unchanged
    """
    if not math.isfinite(angle):
        return angle
    if abs(angle) > 3 * math.pi:
        angle = math.fmod(angle, 2 * math.pi)
    while angle > math.pi:
        angle -= 2 * math.pi
    while angle <= -math.pi:
        angle += 2 * math.pi
    return angle


def clamp_unit(value: float) -> float:
    """Clamp a sine/cosine argument into [-1, 1] to absorb rounding drift."""
    return max(-1.0, min(1.0, value))
