"""Session-related data models."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from ..timeutils import isoformat


@dataclass
class TrackingSession:
    """A bounded-duration tracking window for one user."""
    session_id: str
    user_id: str
    planned_duration_minutes: float
    start_time: datetime
    planned_end_time: datetime
    active: bool = True
    actual_end_time: Optional[datetime] = None
    location_count: int = 0

    def is_past_planned_end(self, now: datetime) -> bool:
        return now > self.planned_end_time

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "user_id": self.user_id,
            "planned_duration_minutes": self.planned_duration_minutes,
            "start_time": isoformat(self.start_time),
            "planned_end_time": isoformat(self.planned_end_time),
            "active": self.active,
            "actual_end_time": isoformat(self.actual_end_time) if self.actual_end_time else None,
            "location_count": self.location_count,
        }
