"""
Unit Tests for the haversine distance primitive (src/hotspots/distance.py)
"""

import math

import numpy as np
import pytest

from src.hotspots import Coordinate, Point, haversine_distance, haversine_many
from src.hotspots.distance import EARTH_RADIUS_M, coordinate_arrays


class TestHaversineDistance:
    """Test scalar great-circle distance."""

    def test_identical_points_zero(self, san_francisco):
        """Test distance from a point to itself."""
        assert haversine_distance(san_francisco, san_francisco) == 0.0

    def test_symmetry(self, san_francisco, los_angeles):
        """Test distance(a, b) == distance(b, a)."""
        assert haversine_distance(san_francisco, los_angeles) == haversine_distance(
            los_angeles, san_francisco
        )

    def test_san_francisco_to_los_angeles(self, san_francisco, los_angeles):
        """Test a well-known city pair (~559km)."""
        d = haversine_distance(san_francisco, los_angeles)
        assert 550_000 < d < 570_000

    @pytest.mark.parametrize("longitude", [-179.0, -45.0, 0.0, 121.7, 180.0])
    def test_hundredth_degree_latitude(self, longitude):
        """Test 0.01 degrees of latitude at any longitude (~1112m)."""
        a = Point(latitude=17.60, longitude=longitude)
        b = Point(latitude=17.61, longitude=longitude)
        assert 1100 < haversine_distance(a, b) < 1125

    def test_accepts_coordinates(self):
        """Test that cluster centres can be measured as well as points."""
        d = haversine_distance(Coordinate(0.0, 0.0), Point(0.0, 1.0))
        assert d == pytest.approx(EARTH_RADIUS_M * math.pi / 180, rel=1e-9)

    def test_antipodal(self):
        """Test half the circumference for antipodal points."""
        d = haversine_distance(Point(0.0, 0.0), Point(0.0, 180.0))
        assert d == pytest.approx(math.pi * EARTH_RADIUS_M, rel=1e-9)

    def test_nan_propagates(self):
        """Test NaN input is not trapped."""
        d = haversine_distance(Point(float("nan"), 0.0), Point(1.0, 1.0))
        assert math.isnan(d)

    def test_returns_builtin_float(self, san_francisco, los_angeles):
        assert type(haversine_distance(san_francisco, los_angeles)) is float


class TestHaversineMany:
    """Test vectorised distance rows."""

    def test_matches_scalar(self, scattered_points):
        """Test each element equals the pairwise result."""
        origin = scattered_points[0]
        lats, lngs = coordinate_arrays(scattered_points)
        row = haversine_many(origin, lats, lngs)

        assert row.shape == (len(scattered_points),)
        for point, dist in zip(scattered_points, row):
            assert dist == pytest.approx(haversine_distance(origin, point), rel=1e-12, abs=1e-9)

    def test_self_distance_zero(self, blob_a):
        lats, lngs = coordinate_arrays(blob_a)
        row = haversine_many(blob_a[2], lats, lngs)
        assert row[2] == 0.0
        assert np.all(row >= 0)

    def test_coordinate_arrays_empty(self):
        lats, lngs = coordinate_arrays([])
        assert lats.shape == (0,)
        assert lngs.shape == (0,)
