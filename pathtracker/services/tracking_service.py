"""Tracking service: high-level API over the path-tracking core."""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Union

from ..config import PathTrackerConfig
from ..events.publisher import SessionEventPublisher
from ..export.formatter import ExportFormat, export_session
from ..geo.simplify import optimize_path
from ..geo.stats import compute_stats
from ..models.session import TrackingSession
from ..storage.point_store import PointStore
from ..storage.session_store import SessionStore
from ..timeutils import utc_now
from .ingestion_service import IngestionService

logger = logging.getLogger(__name__)


class TrackingService:
    """High-level service used by the request layer.

    This service provides a clean API for clients to:
    1. Start/stop tracking sessions
    2. Stream location updates into a session
    3. Read the raw or simplified path and its statistics
    4. Export a session and query overall liveness

    Every method returns a JSON-ready dict and raises the core's error
    kinds (see ``pathtracker.errors``) for the boundary layer to map.
    """

    def __init__(self,
                 config: Optional[PathTrackerConfig] = None,
                 session_store: Optional[SessionStore] = None,
                 publisher: Optional[SessionEventPublisher] = None,
                 clock: Callable[[], datetime] = utc_now):
        """Initialize tracking service.

        Args:
            config: Application configuration (defaults are used if None)
            session_store: Session store; a fresh in-memory one if None
            publisher: Lifecycle publisher; built from config if None
            clock: Source of "now", injectable for tests
        """
        self.config = config if config is not None else PathTrackerConfig()
        self.session_store = session_store if session_store is not None else SessionStore(PointStore())
        self.point_store = self.session_store.point_store
        self.publisher = publisher if publisher is not None else SessionEventPublisher(
            enabled=self.config.events_enabled()
        )
        self.clock = clock
        self.ingestion = IngestionService(self.session_store, self.point_store, self.publisher)
        self.default_min_distance_m = self.config.get_default_min_distance()

        logger.info(f"TrackingService initialized (default min distance "
                    f"{self.default_min_distance_m}m)")

    def _refresh(self, session_id: str) -> TrackingSession:
        """Apply lazy expiry before reporting a session's status."""
        with self.session_store.lock_for(session_id):
            was_active = self.session_store.get(session_id).active
            session = self.session_store.mark_expired_if_past(session_id, self.clock())
        if was_active and not session.active:
            self.publisher.session_expired(session)
        return session

    def start_session(self, user_id: str, duration_minutes: float) -> Dict[str, Any]:
        """Start a new tracking session.

        Returns:
            Dict with session_id and the session record
        """
        session = self.session_store.create(user_id, duration_minutes, now=self.clock())
        self.publisher.session_started(session)
        return {
            "success": True,
            "session_id": session.session_id,
            "message": "Tracking session started",
            "session": session.to_dict(),
        }

    def update_location(self,
                        session_id: str,
                        latitude,
                        longitude,
                        accuracy=None,
                        timestamp=None) -> Dict[str, Any]:
        """Record a location update for an active session."""
        location_count = self.ingestion.record_location(
            session_id,
            latitude,
            longitude,
            accuracy=accuracy,
            timestamp=timestamp,
            now=self.clock(),
        )
        return {
            "success": True,
            "message": "Location updated",
            "location_count": location_count,
        }

    def get_path(self,
                 session_id: str,
                 optimize: bool = False,
                 min_distance_m: Optional[float] = None) -> Dict[str, Any]:
        """Get the session path, optionally simplified.

        Statistics are always computed over the raw recorded sequence.

        Args:
            session_id: Session to read
            optimize: Apply greedy simplification to the returned points
            min_distance_m: Simplification threshold override
        """
        session = self._refresh(session_id)
        points = self.point_store.get_all(session_id)

        locations = points
        if optimize and points:
            threshold = self.default_min_distance_m if min_distance_m is None else min_distance_m
            locations = optimize_path(points, threshold)

        return {
            "success": True,
            "session": session.to_dict(),
            "locations": [point.to_dict() for point in locations],
            "stats": compute_stats(points).to_dict(),
            "optimized": bool(optimize),
        }

    def get_stats(self, session_id: str) -> Dict[str, Any]:
        session = self._refresh(session_id)
        points = self.point_store.get_all(session_id)
        return {
            "success": True,
            "session": session.to_dict(),
            "stats": compute_stats(points).to_dict(),
        }

    def stop_session(self, session_id: str) -> Dict[str, Any]:
        """Stop a session; stopping twice leaves the first end time intact."""
        with self.session_store.lock_for(session_id):
            was_active = self.session_store.get(session_id).active
            session = self.session_store.stop(session_id, self.clock())
        if was_active:
            self.publisher.session_stopped(session)

        points = self.point_store.get_all(session_id)
        return {
            "success": True,
            "message": "Session stopped",
            "session": session.to_dict(),
            "stats": compute_stats(points).to_dict(),
        }

    def list_user_sessions(self, user_id: str) -> Dict[str, Any]:
        """All sessions of a user, each with its statistics."""
        sessions = []
        for session in self.session_store.list_by_user(user_id):
            session = self._refresh(session.session_id)
            record = session.to_dict()
            record["stats"] = compute_stats(self.point_store.get_all(session.session_id)).to_dict()
            sessions.append(record)

        return {
            "success": True,
            "user_id": user_id,
            "sessions": sessions,
        }

    def export(self,
               session_id: str,
               fmt: Union[str, ExportFormat, None] = ExportFormat.STRUCTURED) -> Union[Dict[str, Any], str]:
        """Export the raw recorded sequence as a structured record or GPX."""
        session = self._refresh(session_id)
        points = self.point_store.get_all(session_id)
        return export_session(session, points, fmt)

    def health(self) -> Dict[str, Any]:
        """Liveness summary sourced from the session store."""
        return {
            "status": "healthy",
            "active_sessions": self.session_store.count_active(self.clock()),
            "total_sessions": self.session_store.count(),
        }
