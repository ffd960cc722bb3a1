"""
Great-circle and rhumb-line calculations from a fixed origin point.

All formulae treat the earth as a sphere (ignoring ellipsoidal effects),
which is accurate to within about 0.3% for most purposes. Inputs are in
degrees and kilometers, trigonometry runs in radians, and every result is
returned as a decimal string rounded to the requested precision.

see http://williams.best.vwh.net/avform.htm
"""

from typing import Dict, Optional
import logging
import math
from math import asin, atan2, cos, degrees, log, pi, radians, sin, sqrt, tan

from .config import DEFAULT_PRECISION, DEFAULT_RADIUS_KM
from .geometry import GeoPoint, PointLike, clamp_unit, normalize_radians, to_point
from .precision import PrecisionFormatter

logger = logging.getLogger(__name__)

PointResult = Dict[str, str]


def _mercator_delta(lat1: float, lat2: float) -> float:
    """
    Difference in Mercator-stretched latitude between two latitudes.

    Args:
        lat1: Start latitude in radians
        lat2: End latitude in radians

    Returns:
        ln(tan(lat2/2 + pi/4) / tan(lat1/2 + pi/4)), or a signed infinity
        when either latitude reaches or passes a pole
    """
    top = tan(lat2 / 2 + pi / 4)
    bottom = tan(lat1 / 2 + pi / 4)
    if top > 0 and bottom > 0:
        return log(top / bottom)

    logger.debug(f"Rhumb line between {lat1} and {lat2} rad touches a pole")
    return math.copysign(math.inf, lat2 - lat1)


def _acos_or_zero(numerator: float, denominator: float) -> float:
    # undefined angles fall back to 0
    if denominator == 0:
        return 0.0
    ratio = numerator / denominator
    if math.isnan(ratio):
        return 0.0
    return math.acos(clamp_unit(ratio)) or 0.0


class GeoCalc:
    """Calculator for distances, bearings and points relative to one origin."""

    def __init__(self, lat: float, lon: float, radius: float = DEFAULT_RADIUS_KM):
        """Initializes a GeoCalc bound to an origin point.

        Args:
            lat: Latitude of the origin in degrees
            lon: Longitude of the origin in degrees
            radius: Earth radius in kilometers (default: 6371)

        Raises:
            PointValidationError: If a coordinate is not numeric or the radius
                                  is not positive
        """
        self._origin = GeoPoint(lat=lat, lon=lon, radius=radius)

    @classmethod
    def from_point(cls, point: PointLike, radius: float = DEFAULT_RADIUS_KM) -> "GeoCalc":
        """
        Create a GeoCalc from any supported point shape.

        Args:
            point: A GeoPoint, a mapping with "lat" and "lon" keys, or a
                   (lat, lon) pair
            radius: Earth radius in kilometers for mappings and pairs; a
                    GeoPoint keeps its own radius

        Returns:
            GeoCalc bound to the point
        """
        origin = to_point(point, radius)
        return cls(lat=origin.lat, lon=origin.lon, radius=origin.radius)

    @property
    def origin(self) -> GeoPoint:
        """The origin point, including its radius."""
        return self._origin

    @property
    def lat(self) -> float:
        """Origin latitude in degrees."""
        return self._origin.lat

    @property
    def lon(self) -> float:
        """Origin longitude in degrees."""
        return self._origin.lon

    @property
    def radius(self) -> float:
        """Earth radius in kilometers."""
        return self._origin.radius

    def __repr__(self) -> str:
        return f"GeoCalc(lat={self.lat}, lon={self.lon}, radius={self.radius})"

    def _point(self, lat: float, lon: float, precision: int) -> PointResult:
        return {
            "lat": PrecisionFormatter.format(degrees(lat), precision),
            "lon": PrecisionFormatter.format(degrees(lon), precision),
        }

    def distance_to(self, point: PointLike, precision: int = DEFAULT_PRECISION) -> str:
        """
        Great-circle distance to a point using the haversine formula.

        The haversine formula remains well-conditioned for numerical
        computation even at small distances, unlike the spherical law of
        cosines. The latitude term uses cos(lat1) squared.

        Args:
            point: Destination point
            precision: Negative count of digits to keep after the decimal point

        Returns:
            Distance in kilometers as a decimal string
        """
        dest = to_point(point)
        lat1 = radians(self.lat)
        lon1 = radians(self.lon)
        lat2 = radians(dest.lat)
        lon2 = radians(dest.lon)

        t = sin((lat2 - lat1) / 2) ** 2 + (cos(lat1) ** 2) * (sin((lon2 - lon1) / 2) ** 2)
        d = self.radius * (2 * atan2(sqrt(t), sqrt(max(0.0, 1 - t))))

        return PrecisionFormatter.format(d, precision)

    def _raw_bearing(self, dest: GeoPoint) -> float:
        lat1 = radians(self.lat)
        lat2 = radians(dest.lat)
        # origin minus destination
        dlon = radians(self.lon - dest.lon)

        brng = atan2(
            sin(dlon) * cos(lat2),
            cos(lat1) * sin(lat2) - sin(lat1) * cos(lat2) * cos(dlon),
        )
        return degrees(brng)

    def bearing_to(self, point: PointLike, precision: int = DEFAULT_PRECISION) -> str:
        """
        Initial bearing (forward azimuth) of the great circle to a point.

        The heading varies along a great-circle path; this is the heading
        at the start.

        Args:
            point: Destination point
            precision: Negative count of digits to keep after the decimal point

        Returns:
            Bearing in degrees within [0, 360) as a decimal string
        """
        return PrecisionFormatter.format_initial_bearing(
            self._raw_bearing(to_point(point)), precision
        )

    def final_bearing_to(self, point: PointLike, precision: int = DEFAULT_PRECISION) -> str:
        """
        Final bearing arriving at a point along the great circle from the origin.

        Args:
            point: Destination point
            precision: Negative count of digits to keep after the decimal point

        Returns:
            Bearing in degrees within [0, 360) as a decimal string
        """
        return PrecisionFormatter.format_final_bearing(
            self._raw_bearing(to_point(point)), precision
        )

    def midpoint_to(self, point: PointLike, precision: int = DEFAULT_PRECISION) -> PointResult:
        """
        Midpoint along the great-circle path between the origin and a point.

        see http://mathforum.org/library/drmath/view/51822.html for derivation

        Args:
            point: Destination point
            precision: Negative count of digits to keep after the decimal point

        Returns:
            Dict with "lat" and "lon" decimal strings
        """
        dest = to_point(point)
        lat1 = radians(self.lat)
        lon1 = radians(self.lon)
        lat2 = radians(dest.lat)
        dlon = radians(dest.lon - self.lon)

        bx = cos(lat2) * cos(dlon)
        by = cos(lat2) * sin(dlon)

        lat3 = atan2(sin(lat1) + sin(lat2), sqrt((cos(lat1) + bx) ** 2 + by**2))
        lon3 = normalize_radians(lon1 + atan2(by, cos(lat1) + bx))

        return self._point(lat3, lon3, precision)

    def destination_point(
        self, bearing: float, distance: float, precision: int = DEFAULT_PRECISION
    ) -> PointResult:
        """
        Point reached by travelling a distance along a great circle.

        The bearing is the initial bearing; it may vary before the
        destination is reached.

        Args:
            bearing: Initial bearing in degrees
            distance: Distance in kilometers
            precision: Negative count of digits to keep after the decimal point

        Returns:
            Dict with "lat" and "lon" decimal strings
        """
        dist = distance / self.radius
        brng = radians(bearing)
        lat1 = radians(self.lat)
        lon1 = radians(self.lon)

        lat2 = asin(clamp_unit(sin(lat1) * cos(dist) + cos(lat1) * sin(dist) * cos(brng)))
        lon2 = lon1 + atan2(
            sin(brng) * sin(dist) * cos(lat1), cos(dist) - sin(lat1) * sin(lat2)
        )

        return self._point(lat2, normalize_radians(lon2), precision)

    def boundry_box(
        self,
        width: float,
        height: Optional[float] = None,
        precision: int = DEFAULT_PRECISION,
    ) -> Dict[str, str]:
        """
        Bounding box centred on the origin for a given width and height.

        The corners are the destination points at bearings 315 and 135 over
        half the box diagonal. The min/max names follow those bearings and
        are not sorted numerically.

        Args:
            width: Box width in kilometers
            height: Box height in kilometers (default: same as width)
            precision: Negative count of digits to keep after the decimal point

        Returns:
            Dict with "lat_min", "lon_min", "lat_max" and "lon_max" strings
        """
        if height is None:
            height = width
        diagonal = sqrt((height / 2) ** 2 + (width / 2) ** 2)

        first = self.destination_point(315, diagonal, precision)
        second = self.destination_point(135, diagonal, precision)

        return {
            "lat_min": first["lat"],
            "lon_min": first["lon"],
            "lat_max": second["lat"],
            "lon_max": second["lon"],
        }

    def rhumb_distance_to(self, point: PointLike, precision: int = DEFAULT_PRECISION) -> str:
        """
        Distance to a point along a rhumb line.

        A rhumb line (loxodrome) is a path of constant bearing which crosses
        all meridians at the same angle. It is a straight line on a Mercator
        projection and generally longer than the great-circle route.

        Args:
            point: Destination point
            precision: Negative count of digits to keep after the decimal point

        Returns:
            Distance in kilometers as a decimal string
        """
        dest = to_point(point)
        lat1 = radians(self.lat)
        lat2 = radians(dest.lat)
        dlat = radians(dest.lat - self.lat)
        dlon = abs(radians(dest.lon - self.lon))

        dphi = _mercator_delta(lat1, lat2)
        # E-W line gives dphi=0
        q = dlat / dphi if dphi != 0 else cos(lat1)
        if dlon > pi:
            dlon = 2 * pi - dlon

        dist = sqrt(dlat**2 + (q**2) * (dlon**2)) * self.radius

        return PrecisionFormatter.format(dist, precision)

    def rhumb_bearing_to(self, point: PointLike, precision: int = DEFAULT_PRECISION) -> str:
        """
        Constant bearing of the rhumb line to a point.

        Args:
            point: Destination point
            precision: Negative count of digits to keep after the decimal point

        Returns:
            Bearing in degrees within [0, 360) as a decimal string
        """
        dest = to_point(point)
        lat1 = radians(self.lat)
        lat2 = radians(dest.lat)
        dlon = radians(dest.lon - self.lon)

        dphi = _mercator_delta(lat1, lat2)
        if abs(dlon) > pi:
            dlon = -(2 * pi - dlon) if dlon > 0 else (2 * pi + dlon)

        return PrecisionFormatter.format_initial_bearing(
            degrees(atan2(dlon, dphi)), precision
        )

    def rhumb_destination_point(
        self, bearing: float, distance: float, precision: int = DEFAULT_PRECISION
    ) -> PointResult:
        """
        Point reached by travelling a distance along a rhumb line.

        Args:
            bearing: Constant bearing in degrees
            distance: Distance in kilometers
            precision: Negative count of digits to keep after the decimal point

        Returns:
            Dict with "lat" and "lon" decimal strings
        """
        d = distance / self.radius
        lat1 = radians(self.lat)
        lon1 = radians(self.lon)
        brng = radians(bearing)

        lat2 = lat1 + d * cos(brng)
        dlat = lat2 - lat1
        dphi = _mercator_delta(lat1, lat2)
        # E-W line gives dphi=0
        q = dlat / dphi if dphi != 0 else cos(lat1)
        dlon = d * sin(brng) / q if q != 0 else 0.0

        # Paths over a pole come back down the other side
        if abs(lat2) > pi / 2:
            lat2 = math.copysign(pi - abs(lat2), lat2)

        lon2 = normalize_radians(lon1 + dlon)

        return self._point(lat2, lon2, precision)

    def intersection(
        self,
        bearing1: float,
        point: PointLike,
        bearing2: float,
        precision: int = DEFAULT_PRECISION,
    ) -> Optional[PointResult]:
        """
        Intersection of the path leaving the origin on bearing1 with the path
        leaving a second point on bearing2.

        see http://williams.best.vwh.net/avform.htm#Intersection

        Args:
            bearing1: Initial bearing from the origin in degrees
            point: Start point of the second path
            bearing2: Initial bearing from the second point in degrees
            precision: Negative count of digits to keep after the decimal point

        Returns:
            Dict with "lat" and "lon" decimal strings, or None when the paths
            have no unique intersection (coincident start points, collinear
            paths or diverging paths)
        """
        other = to_point(point)
        lat1 = radians(self.lat)
        lon1 = radians(self.lon)
        lat2 = radians(other.lat)
        lon2 = radians(other.lon)
        brng13 = radians(bearing1)
        brng23 = radians(bearing2)
        dlat = lat2 - lat1
        dlon = lon2 - lon1

        dist12 = 2 * asin(
            clamp_unit(sqrt(sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2))
        )
        if dist12 == 0:
            logger.debug("No intersection: start points coincide")
            return None

        # initial/final bearings between points
        brnga = _acos_or_zero(sin(lat2) - sin(lat1) * cos(dist12), sin(dist12) * cos(lat1))
        brngb = _acos_or_zero(sin(lat1) - sin(lat2) * cos(dist12), sin(dist12) * cos(lat2))

        if sin(dlon) > 0:
            brng12 = brnga
            brng21 = 2 * pi - brngb
        else:
            brng12 = 2 * pi - brnga
            brng21 = brngb

        alpha1 = normalize_radians(brng13 - brng12)
        alpha2 = normalize_radians(brng21 - brng23)

        if sin(alpha1) == 0 and sin(alpha2) == 0:
            logger.debug("No intersection: paths are collinear")
            return None
        if sin(alpha1) * sin(alpha2) < 0:
            logger.debug("No intersection: paths diverge")
            return None

        alpha3 = math.acos(
            clamp_unit(-cos(alpha1) * cos(alpha2) + sin(alpha1) * sin(alpha2) * cos(dist12))
        )
        dist13 = atan2(
            sin(dist12) * sin(alpha1) * sin(alpha2), cos(alpha2) + cos(alpha1) * cos(alpha3)
        )
        lat3 = asin(clamp_unit(sin(lat1) * cos(dist13) + cos(lat1) * sin(dist13) * cos(brng13)))
        dlon13 = atan2(
            sin(brng13) * sin(dist13) * cos(lat1), cos(dist13) - sin(lat1) * sin(lat3)
        )
        lon3 = normalize_radians(lon1 + dlon13)

        return self._point(lat3, lon3, precision)
