"""Location-related data models."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from ..timeutils import isoformat


@dataclass(frozen=True)
class LocationPoint:
    """One recorded geographic fix.

    Coordinates are decimal degrees and are not range-checked. ``accuracy``
    is informational only and never used in computations.
    """
    latitude: float
    longitude: float
    timestamp: datetime     # Event time supplied by the client (or ingestion time)
    received_at: datetime   # Server-assigned ingestion time
    accuracy: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "accuracy": self.accuracy,
            "timestamp": isoformat(self.timestamp),
            "received_at": isoformat(self.received_at),
        }
