"""Error kinds raised by the path-tracking core.

The core never maps these to transport status codes; the boundary layer
does that by looking at ``kind``.
"""


class PathTrackerError(Exception):
    """Base class for all recoverable path-tracking errors."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgumentError(PathTrackerError):
    """Missing or malformed input at creation or ingestion time."""

    kind = "invalid_argument"


class SessionNotFoundError(PathTrackerError):
    """Unknown session id."""

    kind = "not_found"

    def __init__(self, session_id: str):
        super().__init__("Session not found")
        self.session_id = session_id


class InvalidStateError(PathTrackerError):
    """Operation attempted on a session that is no longer active."""

    kind = "invalid_state"


class SessionExpiredError(PathTrackerError):
    """The session's planned window lapsed; detected lazily on access."""

    kind = "expired"
