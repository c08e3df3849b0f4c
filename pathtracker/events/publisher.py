"""Session lifecycle publisher for pub/sub event publishing."""

import logging

from pubsub import pub

from ..models.events import LocationEvent, SessionEvent
from ..models.location import LocationPoint
from ..models.session import TrackingSession

logger = logging.getLogger(__name__)

SESSION_STARTED = "session_started"
SESSION_STOPPED = "session_stopped"
SESSION_EXPIRED = "session_expired"
LOCATION_RECORDED = "location_recorded"


class SessionEventPublisher:
    """Publishes session lifecycle and location events using pubsub.pub."""

    def __init__(self, enabled: bool = True):
        """Initialize session event publisher.

        Args:
            enabled: When False every publish call is a no-op
        """
        self.enabled = enabled
        logger.info(f"SessionEventPublisher initialized (enabled={enabled})")

    def _send(self, topic: str, event) -> None:
        """Deliver an event; listener failures are logged and not re-raised."""
        if not self.enabled:
            return
        try:
            pub.sendMessage(topic, event=event)
        except Exception:
            logger.exception(f"Listener failed while handling {topic}")

    def session_started(self, session: TrackingSession) -> None:
        self._send(SESSION_STARTED, SessionEvent(event_type="started", session=session))
        logger.debug(f"Published {SESSION_STARTED}: {session.session_id}")

    def session_stopped(self, session: TrackingSession) -> None:
        self._send(SESSION_STOPPED, SessionEvent(event_type="stopped", session=session))
        logger.debug(f"Published {SESSION_STOPPED}: {session.session_id}")

    def session_expired(self, session: TrackingSession) -> None:
        self._send(SESSION_EXPIRED, SessionEvent(event_type="expired", session=session))
        logger.debug(f"Published {SESSION_EXPIRED}: {session.session_id}")

    def location_recorded(self, session_id: str, point: LocationPoint, location_count: int) -> None:
        self._send(LOCATION_RECORDED, LocationEvent(
            session_id=session_id,
            point=point,
            location_count=location_count,
        ))
