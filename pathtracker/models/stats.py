"""Path statistics data model."""

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass
class PathStats:
    """Aggregate motion metrics for a point sequence."""
    total_distance_meters: float
    average_speed_kmh: float
    duration_seconds: int
    point_count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
