"""In-memory ordered point sequences, one per session."""

import logging
import threading
from typing import Dict, List

from ..errors import SessionNotFoundError
from ..models.location import LocationPoint

logger = logging.getLogger(__name__)


class PointStore:
    """Keeps the recorded points of each session in insertion order.

    Points are never de-duplicated, re-ordered or mutated once appended.
    Writers for one session are serialized by the session lock held in
    ``SessionStore``; the store's own lock only guards the key registry.
    """

    def __init__(self):
        self._points: Dict[str, List[LocationPoint]] = {}
        self._registry_lock = threading.Lock()

    def register(self, session_id: str) -> None:
        """Create an empty sequence for a session (no-op if it exists)."""
        with self._registry_lock:
            self._points.setdefault(session_id, [])

    def append(self, session_id: str, point: LocationPoint) -> int:
        """Append a point to the end of a session's sequence.

        Returns:
            Length of the sequence after the append
        """
        points = self._points.get(session_id)
        if points is None:
            raise SessionNotFoundError(session_id)
        points.append(point)
        logger.debug(f"Appended point to {session_id}: now {len(points)} points")
        return len(points)

    def get_all(self, session_id: str) -> List[LocationPoint]:
        """Snapshot of a session's points; empty list if none were recorded."""
        return list(self._points.get(session_id, ()))

    def count(self, session_id: str) -> int:
        return len(self._points.get(session_id, ()))
