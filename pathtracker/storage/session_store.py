"""In-memory session store with per-session locking and lazy expiry."""

import logging
import math
import secrets
import threading
from dataclasses import replace
from datetime import datetime, timedelta
from numbers import Real
from typing import Dict, List, Optional

from ..errors import InvalidArgumentError, SessionNotFoundError
from ..models.session import TrackingSession
from ..timeutils import ensure_aware, utc_now
from .point_store import PointStore

logger = logging.getLogger(__name__)


def generate_session_id() -> str:
    """128 random bits, hex-encoded."""
    return secrets.token_hex(16)


class SessionStore:
    """Keyed lifecycle state for tracking sessions.

    Every session gets its own re-entrant lock. Read-check-mutate sequences
    (ingestion, stop, expiry) hold that lock; sessions never block each
    other. Reads return copies so callers cannot mutate stored state.
    """

    def __init__(self, point_store: Optional[PointStore] = None):
        """Initialize session store.

        Args:
            point_store: Store that receives an empty sequence for every new
                session. A private one is created if not given.
        """
        self.point_store = point_store if point_store is not None else PointStore()
        self._sessions: Dict[str, TrackingSession] = {}
        self._locks: Dict[str, threading.RLock] = {}
        self._registry_lock = threading.Lock()
        logger.info("SessionStore initialized")

    def create(self, user_id: str, planned_duration_minutes: float,
               now: Optional[datetime] = None) -> TrackingSession:
        """Create a new active session and its empty point sequence.

        Args:
            user_id: Caller-supplied user identifier (format not validated)
            planned_duration_minutes: Length of the tracking window
            now: Creation time, defaults to the current UTC time

        Returns:
            Snapshot of the new session

        Raises:
            InvalidArgumentError: If user_id is empty or the duration is not
                a positive number
        """
        if not isinstance(user_id, str) or not user_id:
            raise InvalidArgumentError("userId is required")
        if (isinstance(planned_duration_minutes, bool)
                or not isinstance(planned_duration_minutes, Real)
                or not math.isfinite(planned_duration_minutes)
                or planned_duration_minutes <= 0):
            raise InvalidArgumentError("duration must be a positive number of minutes")

        start_time = ensure_aware(now) if now is not None else utc_now()
        try:
            planned_end_time = start_time + timedelta(minutes=planned_duration_minutes)
        except (OverflowError, ValueError):
            raise InvalidArgumentError("duration is out of range") from None

        session = TrackingSession(
            session_id=generate_session_id(),
            user_id=user_id,
            planned_duration_minutes=planned_duration_minutes,
            start_time=start_time,
            planned_end_time=planned_end_time,
        )

        with self._registry_lock:
            self.point_store.register(session.session_id)
            self._locks[session.session_id] = threading.RLock()
            self._sessions[session.session_id] = session

        logger.info(f"Created session {session.session_id} for user {user_id} "
                    f"({planned_duration_minutes} min)")
        return replace(session)

    def lock_for(self, session_id: str) -> threading.RLock:
        """Lock guarding one session's read-check-mutate sequences.

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        lock = self._locks.get(session_id)
        if lock is None:
            raise SessionNotFoundError(session_id)
        return lock

    def _record(self, session_id: str) -> TrackingSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def get(self, session_id: str) -> TrackingSession:
        """Snapshot of a session.

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        with self.lock_for(session_id):
            return replace(self._record(session_id))

    def mark_expired_if_past(self, session_id: str, now: datetime) -> TrackingSession:
        """Deactivate the session if its planned window has lapsed.

        The first detected expiry sets ``actual_end_time``; later calls and
        already-inactive sessions are left untouched.

        Returns:
            Snapshot of the (possibly updated) session
        """
        now = ensure_aware(now)
        with self.lock_for(session_id):
            session = self._record(session_id)
            if session.active and session.is_past_planned_end(now):
                session.active = False
                session.actual_end_time = now
                logger.info(f"Session {session_id} expired at {now.isoformat()}")
            return replace(session)

    def stop(self, session_id: str, now: datetime) -> TrackingSession:
        """Stop a session. Stopping an inactive session changes nothing.

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        now = ensure_aware(now)
        with self.lock_for(session_id):
            session = self._record(session_id)
            if session.active:
                session.active = False
                session.actual_end_time = now
                logger.info(f"Stopped session {session_id}")
            else:
                logger.debug(f"Stop requested for inactive session {session_id}")
            return replace(session)

    def set_location_count(self, session_id: str, count: int) -> TrackingSession:
        with self.lock_for(session_id):
            session = self._record(session_id)
            session.location_count = count
            return replace(session)

    def list_by_user(self, user_id: str) -> List[TrackingSession]:
        """Unordered snapshot of all sessions belonging to a user."""
        return [s for s in self.all_sessions() if s.user_id == user_id]

    def all_sessions(self) -> List[TrackingSession]:
        with self._registry_lock:
            session_ids = list(self._sessions)
        return [self.get(session_id) for session_id in session_ids]

    def count(self) -> int:
        return len(self._sessions)

    def count_active(self, now: datetime) -> int:
        """Number of sessions still active after applying lazy expiry."""
        with self._registry_lock:
            session_ids = list(self._sessions)
        return sum(1 for session_id in session_ids
                   if self.mark_expired_if_past(session_id, now).active)
