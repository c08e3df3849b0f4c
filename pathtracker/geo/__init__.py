"""Geospatial computations over point sequences."""

from .distance import EARTH_RADIUS_M, haversine_m
from .simplify import DEFAULT_MIN_DISTANCE_M, optimize_path
from .stats import compute_stats

__all__ = [
    "EARTH_RADIUS_M",
    "haversine_m",
    "DEFAULT_MIN_DISTANCE_M",
    "optimize_path",
    "compute_stats",
]
