"""Greedy distance-based path simplification."""

import logging
from typing import List, Sequence

from ..models.location import LocationPoint
from .distance import point_distance_m

logger = logging.getLogger(__name__)

DEFAULT_MIN_DISTANCE_M = 10.0


def optimize_path(points: Sequence[LocationPoint],
                  min_distance_m: float = DEFAULT_MIN_DISTANCE_M) -> List[LocationPoint]:
    """Drop points that sit closer than ``min_distance_m`` to the last kept point.

    The first and last points are always kept. Distance is measured from the
    last *kept* point, not the previously visited one, so slow drift
    accumulates until it crosses the threshold.

    Args:
        points: Point sequence in recorded order
        min_distance_m: Minimum spacing between consecutive kept points

    Returns:
        New list with the retained points, in input order
    """
    if len(points) <= 2:
        return list(points)

    optimized = [points[0]]
    for candidate in points[1:-1]:
        if point_distance_m(optimized[-1], candidate) >= min_distance_m:
            optimized.append(candidate)
    optimized.append(points[-1])

    logger.debug(f"Optimized path: {len(points)} -> {len(optimized)} points "
                 f"(min distance {min_distance_m}m)")
    return optimized
