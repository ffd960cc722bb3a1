#!/usr/bin/env python3
"""
Geocalc - spherical earth calculations for latitude/longitude points.

This package computes great-circle and rhumb-line distances, bearings,
midpoints, destination points, bounding boxes and path intersections,
reporting every result as a fixed-precision decimal string.
"""
import importlib.metadata

__version__ = importlib.metadata.version("geocalc")

# Import main classes for public API
from .calc import GeoCalc
from .config import DEFAULT_PRECISION, DEFAULT_RADIUS_KM, GeoCalcConfig
from .geometry import GeoPoint, PointValidationError
from .precision import PrecisionFormatter

__all__ = [
    "GeoCalc",
    "GeoCalcConfig",
    "GeoPoint",
    "PointValidationError",
    "PrecisionFormatter",
    "DEFAULT_PRECISION",
    "DEFAULT_RADIUS_KM",
]
