"""Event models for pub/sub session lifecycle notifications."""

from dataclasses import dataclass, field
from datetime import datetime

from .location import LocationPoint
from .session import TrackingSession
from ..timeutils import utc_now


@dataclass
class SessionEvent:
    """Session lifecycle event."""
    event_type: str  # "started", "stopped", "expired"
    session: TrackingSession
    timestamp: datetime = field(default_factory=utc_now)


@dataclass
class LocationEvent:
    """A point was appended to a session's sequence."""
    session_id: str
    point: LocationPoint
    location_count: int
    timestamp: datetime = field(default_factory=utc_now)
