"""Unit tests for the haversine distance function."""

import math

import pytest

from pathtracker.geo.distance import EARTH_RADIUS_M, haversine_m


@pytest.mark.unit
class TestHaversine:
    """Test cases for haversine_m."""

    @pytest.mark.parametrize("lat, lon", [(0.0, 0.0), (51.5, -0.12), (-33.9, 151.2), (89.9, 179.9)])
    def test_identical_points_are_zero(self, lat, lon):
        """Test distance from a point to itself is zero."""
        assert haversine_m(lat, lon, lat, lon) == 0.0

    def test_symmetry(self):
        """Test distance(A, B) == distance(B, A)."""
        a = (48.8566, 2.3522)
        b = (40.7128, -74.0060)
        assert haversine_m(*a, *b) == pytest.approx(haversine_m(*b, *a))

    def test_one_degree_of_longitude_at_equator(self):
        """Test 1 degree along the equator is about 111 195 m."""
        assert haversine_m(0.0, 0.0, 0.0, 1.0) == pytest.approx(111_195, abs=1)

    def test_uses_mean_earth_radius(self):
        """Test half the circumference for antipodal points."""
        assert EARTH_RADIUS_M == 6_371_000.0
        assert haversine_m(0.0, 0.0, 0.0, 180.0) == pytest.approx(math.pi * EARTH_RADIUS_M)

    def test_nan_propagates(self):
        """Test invalid input yields NaN instead of raising."""
        assert math.isnan(haversine_m(float("nan"), 0.0, 0.0, 0.0))
