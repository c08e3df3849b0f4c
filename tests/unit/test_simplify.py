"""Unit tests for greedy path simplification."""

import pytest

from pathtracker.geo.distance import point_distance_m
from pathtracker.geo.simplify import DEFAULT_MIN_DISTANCE_M, optimize_path

# About 3.3 m of longitude at the equator
STEP_DEG = 0.00003


@pytest.mark.unit
class TestOptimizePath:
    """Test cases for optimize_path."""

    def test_default_threshold(self):
        """Test the default minimum distance is 10 meters."""
        assert DEFAULT_MIN_DISTANCE_M == 10.0

    @pytest.mark.parametrize("count", [0, 1, 2])
    def test_short_inputs_unchanged(self, point_factory, count):
        """Test inputs of length <= 2 come back as an equal, new list."""
        points = [point_factory(0.0, 0.0, 0), point_factory(0.0, 0.0, 1)][:count]

        optimized = optimize_path(points, 1000.0)

        assert optimized == points
        assert optimized is not points

    def test_keeps_first_and_last(self, point_factory):
        """Test endpoints survive even when everything is closer than the threshold."""
        points = [point_factory(0.0, i * 0.000001, i) for i in range(10)]

        optimized = optimize_path(points, 50.0)

        assert optimized == [points[0], points[-1]]

    def test_distance_measured_from_last_kept_point(self, point_factory):
        """Test slow drift is caught once it accumulates past the threshold."""
        points = [point_factory(0.0, i * STEP_DEG, i) for i in range(12)]

        optimized = optimize_path(points, 12.0)

        # Each hop is ~3.3 m, so every 4th point is ~13.3 m from the last kept one
        assert optimized[:3] == [points[0], points[4], points[8]]
        assert optimized[-1] == points[-1]

    def test_spacing_between_kept_points(self, point_factory):
        """Test consecutive kept points (except the forced last) are >= threshold apart."""
        points = [point_factory(0.0, (i * STEP_DEG) * (1 + (i % 3)), i) for i in range(40)]
        threshold = 12.0

        optimized = optimize_path(points, threshold)

        assert optimized[0] == points[0]
        assert optimized[-1] == points[-1]
        for prev, curr in zip(optimized[:-2], optimized[1:-1]):
            assert point_distance_m(prev, curr) >= threshold

    def test_far_apart_points_all_kept(self, point_factory):
        """Test nothing is dropped when every hop exceeds the threshold."""
        points = [point_factory(0.0, i * 0.001, i) for i in range(5)]
        assert optimize_path(points, 10.0) == points

    def test_does_not_mutate_input(self, point_factory):
        """Test the input list is left untouched."""
        points = [point_factory(0.0, i * 0.000001, i) for i in range(5)]
        snapshot = list(points)

        optimize_path(points)

        assert points == snapshot
