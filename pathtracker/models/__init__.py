"""Data models for the PathTracker application."""

from .session import TrackingSession
from .location import LocationPoint
from .stats import PathStats
from .events import SessionEvent, LocationEvent

__all__ = [
    "TrackingSession",
    "LocationPoint",
    "PathStats",
    "SessionEvent",
    "LocationEvent",
]
