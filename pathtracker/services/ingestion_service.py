"""Ingestion service that validates and appends location points."""

import logging
import math
from datetime import datetime
from numbers import Real
from typing import Optional, Union

from ..errors import InvalidArgumentError, InvalidStateError, SessionExpiredError
from ..events.publisher import SessionEventPublisher
from ..models.location import LocationPoint
from ..storage.point_store import PointStore
from ..storage.session_store import SessionStore
from ..timeutils import ensure_aware, parse_timestamp, utc_now

logger = logging.getLogger(__name__)


def _coerce_number(name: str, value) -> float:
    """Accept real numbers and numeric strings; NaN passes through."""
    if value is None:
        raise InvalidArgumentError(f"{name} is required")
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{name} must be a number")
    if isinstance(value, Real):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            pass
    raise InvalidArgumentError(f"{name} must be a number")


class IngestionService:
    """Validates incoming location updates and appends them to a session.

    The per-update sequence is existence -> active flag -> expiry -> append,
    run under the session's lock so concurrent updates for one session are
    serialized and none is lost.
    """

    def __init__(self,
                 session_store: SessionStore,
                 point_store: Optional[PointStore] = None,
                 publisher: Optional[SessionEventPublisher] = None):
        """Initialize ingestion service.

        Args:
            session_store: Session lifecycle store
            point_store: Point sequences; defaults to the session store's own
            publisher: Optional lifecycle event publisher
        """
        self.session_store = session_store
        self.point_store = point_store if point_store is not None else session_store.point_store
        self.publisher = publisher

    def record_location(self,
                        session_id: str,
                        latitude,
                        longitude,
                        accuracy=None,
                        timestamp: Optional[Union[str, datetime]] = None,
                        now: Optional[datetime] = None) -> int:
        """Record one location fix for an active session.

        Args:
            session_id: Target session
            latitude: Latitude in degrees (not range-checked)
            longitude: Longitude in degrees (not range-checked)
            accuracy: Optional accuracy in meters, informational only
            timestamp: Event time; defaults to ``now``
            now: Ingestion time; defaults to the current UTC time

        Returns:
            Number of points recorded for the session after this one

        Raises:
            InvalidArgumentError: Missing or malformed coordinates/timestamp
            SessionNotFoundError: Unknown session
            InvalidStateError: Session already stopped or expired
            SessionExpiredError: Planned window lapsed; nothing was appended
        """
        lat = _coerce_number("latitude", latitude)
        lon = _coerce_number("longitude", longitude)
        acc = _coerce_number("accuracy", accuracy) if accuracy is not None else None
        if acc is not None and math.isnan(acc):
            acc = None
        event_time = parse_timestamp(timestamp) if timestamp is not None else None

        now = ensure_aware(now) if now is not None else utc_now()

        with self.session_store.lock_for(session_id):
            session = self.session_store.get(session_id)
            if not session.active:
                raise InvalidStateError("Session is not active")

            session = self.session_store.mark_expired_if_past(session_id, now)
            expired = not session.active

            if not expired:
                point = LocationPoint(
                    latitude=lat,
                    longitude=lon,
                    accuracy=acc,
                    timestamp=event_time if event_time is not None else now,
                    received_at=now,
                )
                location_count = self.point_store.append(session_id, point)
                self.session_store.set_location_count(session_id, location_count)

        if expired:
            logger.info(f"Rejected location for expired session {session_id}")
            if self.publisher:
                self.publisher.session_expired(session)
            raise SessionExpiredError("Session has expired")

        logger.debug(f"Recorded location for {session_id}: ({lat}, {lon}) "
                     f"count={location_count}")
        if self.publisher:
            self.publisher.location_recorded(session_id, point, location_count)
        return location_count
