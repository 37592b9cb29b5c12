"""Tests for great-circle distance and rectangle helpers."""

from __future__ import annotations

import math

import pytest

from infra_kml.models.region import RegionBounds
from infra_kml.utils.geodesy import (
    compute_bounds,
    haversine_distance_km,
    is_valid_wgs84,
    nearest_point_in_rect,
    rect_contains,
    rects_intersect,
)

BOX = RegionBounds(north=30.0, south=20.0, east=80.0, west=70.0)


class TestHaversine:
    """haversine_distance_km."""

    def test_identical_points_are_zero(self) -> None:
        assert haversine_distance_km(28.6139, 77.209, 28.6139, 77.209) == 0.0

    def test_symmetric(self) -> None:
        forward = haversine_distance_km(28.6139, 77.209, 19.076, 72.8777)
        backward = haversine_distance_km(19.076, 72.8777, 28.6139, 77.209)
        assert forward == backward

    def test_delhi_mumbai(self) -> None:
        assert haversine_distance_km(28.6139, 77.209, 19.076, 72.8777) == pytest.approx(1150, rel=0.01)

    def test_one_degree_of_latitude(self) -> None:
        expected = 6371.0 * math.pi / 180
        assert haversine_distance_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(expected)

    def test_antipodes(self) -> None:
        assert haversine_distance_km(0.0, 0.0, 0.0, 180.0) == pytest.approx(6371.0 * math.pi)

    def test_near_antipodal_pairs_are_finite(self) -> None:
        half_circumference = 6371.0 * math.pi
        for step in range(1, 9000):
            lat = step / 100
            distance = haversine_distance_km(lat, 10.0, -lat, -170.0)
            assert math.isfinite(distance), lat
            assert distance == pytest.approx(half_circumference), lat

    def test_non_finite_is_nan(self) -> None:
        assert math.isnan(haversine_distance_km(math.nan, 0.0, 1.0, 1.0))


class TestRectangles:
    """Containment, intersection and clamping."""

    def test_contains_inclusive(self) -> None:
        assert rect_contains(30.0, 80.0, BOX)
        assert rect_contains(25.0, 75.0, BOX)
        assert not rect_contains(30.01, 75.0, BOX)

    def test_nan_not_contained(self) -> None:
        assert not rect_contains(math.nan, 75.0, BOX)

    def test_intersect(self) -> None:
        assert rects_intersect(BOX, RegionBounds(north=35.0, south=25.0, east=85.0, west=75.0))
        assert rects_intersect(BOX, RegionBounds(north=20.0, south=10.0, east=75.0, west=71.0))
        assert not rects_intersect(BOX, RegionBounds(north=10.0, south=0.0, east=75.0, west=71.0))

    def test_nearest_point_clamps(self) -> None:
        assert nearest_point_in_rect(35.0, 85.0, BOX) == (30.0, 80.0)
        assert nearest_point_in_rect(25.0, 60.0, BOX) == (25.0, 70.0)

    def test_nearest_point_inside_unchanged(self) -> None:
        assert nearest_point_in_rect(25.5, 75.5, BOX) == (25.5, 75.5)


class TestComputeBounds:
    """compute_bounds aggregates (lat, lng) pairs."""

    def test_empty(self) -> None:
        assert compute_bounds([]) is None

    def test_single_point(self) -> None:
        assert compute_bounds([(10.0, 20.0)]) == RegionBounds(north=10.0, south=10.0, east=20.0, west=20.0)

    def test_several_points(self) -> None:
        bounds = compute_bounds([(10.0, 20.0), (-5.0, 40.0), (3.0, -1.0)])
        assert bounds == RegionBounds(north=10.0, south=-5.0, east=40.0, west=-1.0)


class TestIsValidWgs84:
    """is_valid_wgs84."""

    @pytest.mark.parametrize(
        ("lat", "lng", "expected"),
        [
            (0.0, 0.0, True),
            (90.0, -180.0, True),
            (90.1, 0.0, False),
            (0.0, 180.5, False),
            (math.nan, 0.0, False),
            (0.0, math.inf, False),
            ("x", 0.0, False),
        ],
    )
    def test_values(self, lat: float, lng: float, expected: bool) -> None:
        assert is_valid_wgs84(lat, lng) is expected
