#!/usr/bin/env python3
"""
Tests for GeoCalc distance, bearing and position calculations.
"""

import math

import pytest
from geocalc import GeoCalc, GeoPoint, PointValidationError

MADRID = {"lat": 40.417875, "lon": -3.710205}
NEARBY = {"lat": 40.422371, "lon": -3.704298}

# One degree of arc on the default sphere
ONE_DEGREE_KM = 6371 * math.radians(1)


@pytest.fixture
def gc():
    return GeoCalc(lat=MADRID["lat"], lon=MADRID["lon"])


class TestReferenceValues:
    """Known results for two points in Madrid at precision -6."""

    def test_distance_to(self, gc):
        assert gc.distance_to(NEARBY, -6) == "0.707106"

    def test_rhumb_distance_to(self, gc):
        assert gc.rhumb_distance_to(NEARBY, -6) == "0.707095"

    def test_bearing_to(self, gc):
        assert gc.bearing_to(NEARBY, -6) == "314.004851"

    def test_rhumb_bearing_to(self, gc):
        assert gc.rhumb_bearing_to(NEARBY, -6) == "45.006766"

    def test_final_bearing_to(self, gc):
        assert gc.final_bearing_to(NEARBY, -6) == "134.004851"

    def test_rhumb_destination_point(self, gc):
        assert gc.rhumb_destination_point(30, 1, -6) == {
            "lat": "40.425663",
            "lon": "-3.704298",
        }

    def test_midpoint_to(self, gc):
        assert gc.midpoint_to(NEARBY, -6) == {"lat": "40.420123", "lon": "-3.707252"}

    def test_intersection(self, gc):
        assert gc.intersection(90, NEARBY, 180, -6) == {
            "lat": "40.417875",
            "lon": "-3.704298",
        }

    def test_default_precision_is_six_decimals(self, gc):
        assert gc.distance_to(NEARBY) == "0.707106"


class TestConstruction:
    def test_read_only_origin(self, gc):
        assert gc.lat == 40.417875
        assert gc.lon == -3.710205
        assert gc.radius == 6371.0
        assert gc.origin == GeoPoint(lat=40.417875, lon=-3.710205)
        with pytest.raises(AttributeError):
            gc.lat = 0.0

    def test_custom_radius(self):
        gc = GeoCalc(lat=0.0, lon=0.0, radius=1.0)
        assert gc.distance_to((0.0, 90.0), -6) == "1.570796"

    def test_huge_radius_keeps_every_digit(self):
        gc = GeoCalc(lat=0.0, lon=0.0, radius=1e80)
        result = gc.distance_to((0.0, 1.0))
        assert result.startswith("17453292519943")
        assert len(result) == 79

    def test_from_point(self):
        gc = GeoCalc.from_point(MADRID)
        assert gc.lat == MADRID["lat"]
        assert gc.lon == MADRID["lon"]

    def test_from_point_radius(self):
        assert GeoCalc.from_point((0.0, 0.0), radius=1.0).radius == 1.0
        # a GeoPoint carries its own radius
        point = GeoPoint(lat=0.0, lon=0.0, radius=2.0)
        assert GeoCalc.from_point(point, radius=1.0).radius == 2.0

    def test_invalid_origin(self):
        with pytest.raises(PointValidationError):
            GeoCalc(lat="north", lon=0.0)
        with pytest.raises(PointValidationError):
            GeoCalc(lat=0.0, lon=0.0, radius=0)

    def test_missing_destination_field(self, gc):
        with pytest.raises(PointValidationError):
            gc.distance_to({"lat": 40.0})

    def test_point_shapes_are_interchangeable(self, gc):
        expected = gc.distance_to(NEARBY)
        assert gc.distance_to((NEARBY["lat"], NEARBY["lon"])) == expected
        assert gc.distance_to(GeoPoint(**NEARBY)) == expected
        assert gc.distance_to({"lat": "40.422371", "lon": "-3.704298"}) == expected

    def test_results_can_be_chained(self, gc):
        midpoint = gc.midpoint_to(NEARBY)
        assert float(gc.distance_to(midpoint, -3)) == pytest.approx(0.354, abs=0.001)

    def test_precision_must_be_integer(self, gc):
        with pytest.raises(TypeError):
            gc.distance_to(NEARBY, -6.5)


class TestDistance:
    def test_distance_to_self_is_zero(self, gc):
        assert gc.distance_to(MADRID) == "0"
        assert gc.distance_to(MADRID, 0) == "0"

    def test_distance_along_equator(self):
        gc = GeoCalc(lat=0.0, lon=0.0)
        assert gc.distance_to((0.0, 1.0), -3) == "111.195"

    def test_distance_along_meridian(self):
        gc = GeoCalc(lat=0.0, lon=0.0)
        assert gc.distance_to((1.0, 0.0), -3) == "111.195"

    def test_rhumb_distance_along_equator(self):
        # E-W line, no Mercator stretch
        gc = GeoCalc(lat=0.0, lon=0.0)
        assert gc.rhumb_distance_to((0.0, 1.0), -3) == "111.195"

    def test_rhumb_distance_wraps_antimeridian(self):
        gc = GeoCalc(lat=0.0, lon=179.5)
        assert gc.rhumb_distance_to((0.0, -179.5), -3) == "111.195"


class TestBearing:
    def test_due_north(self):
        gc = GeoCalc(lat=0.0, lon=0.0)
        assert gc.bearing_to((1.0, 0.0)) == "0"
        assert gc.final_bearing_to((1.0, 0.0)) == "180"

    def test_longitude_difference_is_origin_minus_destination(self):
        # Heading east is reported as 270 under this convention
        gc = GeoCalc(lat=0.0, lon=0.0)
        assert gc.bearing_to((0.0, 1.0)) == "270"
        assert gc.final_bearing_to((0.0, 1.0)) == "90"

    def test_rhumb_bearing_due_east(self):
        gc = GeoCalc(lat=0.0, lon=0.0)
        assert gc.rhumb_bearing_to((0.0, 1.0)) == "90"

    def test_rhumb_bearing_wraps_antimeridian(self):
        gc = GeoCalc(lat=0.0, lon=179.5)
        assert gc.rhumb_bearing_to((0.0, -179.5), -3) == "90"


class TestPoints:
    def test_destination_point_zero_distance(self, gc):
        assert gc.destination_point(90, 0) == {"lat": "40.417875", "lon": "-3.710205"}

    def test_destination_point_quarter_circle(self):
        gc = GeoCalc(lat=0.0, lon=0.0)
        assert gc.destination_point(90, 90 * ONE_DEGREE_KM) == {"lat": "0", "lon": "90"}

    def test_destination_point_normalizes_longitude(self):
        gc = GeoCalc(lat=0.0, lon=170.0)
        result = gc.destination_point(90, 20 * ONE_DEGREE_KM)
        assert float(result["lon"]) == pytest.approx(-170.0, abs=1e-6)

    def test_midpoint_along_equator(self):
        gc = GeoCalc(lat=0.0, lon=0.0)
        assert gc.midpoint_to((0.0, 10.0)) == {"lat": "0", "lon": "5"}

    def test_midpoint_across_antimeridian(self):
        gc = GeoCalc(lat=0.0, lon=170.0)
        result = gc.midpoint_to((0.0, -170.0))
        assert abs(float(result["lon"])) == pytest.approx(180.0)

    def test_rhumb_destination_along_equator(self):
        gc = GeoCalc(lat=0.0, lon=0.0)
        assert gc.rhumb_destination_point(90, ONE_DEGREE_KM) == {"lat": "0", "lon": "1"}

    def test_rhumb_destination_over_pole_reflects_latitude(self):
        gc = GeoCalc(lat=89.0, lon=0.0)
        assert gc.rhumb_destination_point(0, 2 * ONE_DEGREE_KM) == {"lat": "89", "lon": "0"}


class TestBoundryBox:
    def test_corners_are_destination_points(self, gc):
        diagonal = math.sqrt(1.5**2 + 2**2)
        bbox = gc.boundry_box(3, 4, -6)
        first = gc.destination_point(315, diagonal, -6)
        second = gc.destination_point(135, diagonal, -6)
        assert bbox == {
            "lat_min": first["lat"],
            "lon_min": first["lon"],
            "lat_max": second["lat"],
            "lon_max": second["lon"],
        }

    def test_height_defaults_to_width(self, gc):
        assert gc.boundry_box(2) == gc.boundry_box(2, 2)

    def test_labels_follow_bearing_not_value(self, gc):
        # 315 degrees heads north-west, so "lat_min" is the larger latitude
        bbox = gc.boundry_box(1, 1)
        assert float(bbox["lat_min"]) > float(bbox["lat_max"])
        assert float(bbox["lon_min"]) < float(bbox["lon_max"])


class TestIntersection:
    def test_coincident_points_have_no_solution(self, gc):
        assert gc.intersection(90, MADRID, 180) is None

    def test_collinear_paths_have_no_solution(self):
        # both paths run along the equator through each other's start
        gc = GeoCalc(lat=0.0, lon=0.0)
        assert gc.intersection(90, (0.0, 10.0), 270) is None

    def test_diverging_paths_have_no_solution(self):
        gc = GeoCalc(lat=0.0, lon=0.0)
        assert gc.intersection(0, (0.0, 10.0), 180) is None

    def test_converging_paths(self):
        gc = GeoCalc(lat=0.0, lon=0.0)
        result = gc.intersection(45, (0.0, 10.0), 315)
        assert float(result["lon"]) == pytest.approx(5.0, abs=1e-6)
        # Napier's rule: tan(lat) = tan(45) * sin(5)
        expected_lat = math.degrees(math.atan(math.sin(math.radians(5))))
        assert float(result["lat"]) == pytest.approx(expected_lat, abs=1e-6)
