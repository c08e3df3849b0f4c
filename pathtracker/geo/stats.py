"""Path statistics: distance, duration and average speed."""

import math
from typing import Sequence

from ..models.location import LocationPoint
from ..models.stats import PathStats
from .distance import point_distance_m

MPS_TO_KMH = 3.6


def compute_stats(points: Sequence[LocationPoint]) -> PathStats:
    """Compute aggregate motion metrics for a point sequence.

    Points are taken in recorded order and never re-sorted by timestamp, so
    out-of-order event times can yield a zero or negative duration. In that
    case the average speed is reported as 0.

    Args:
        points: Point sequence in recorded order

    Returns:
        PathStats with distance and speed rounded to 2 decimals and
        duration rounded to whole seconds
    """
    if len(points) < 2:
        return PathStats(
            total_distance_meters=0.0,
            average_speed_kmh=0.0,
            duration_seconds=0,
            point_count=len(points),
        )

    total_distance = sum(
        point_distance_m(prev, curr) for prev, curr in zip(points, points[1:])
    )
    duration = (points[-1].timestamp - points[0].timestamp).total_seconds()
    average_speed = (total_distance / duration) * MPS_TO_KMH if duration > 0 else 0.0

    return PathStats(
        total_distance_meters=round(total_distance, 2),
        average_speed_kmh=round(average_speed, 2),
        duration_seconds=math.floor(duration + 0.5),
        point_count=len(points),
    )
