"""Services layer for PathTracker application logic."""

from .ingestion_service import IngestionService
from .tracking_service import TrackingService

__all__ = [
    "IngestionService",
    "TrackingService",
]
