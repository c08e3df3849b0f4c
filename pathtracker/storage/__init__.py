"""In-memory session and point storage."""

from .point_store import PointStore
from .session_store import SessionStore, generate_session_id

__all__ = [
    "PointStore",
    "SessionStore",
    "generate_session_id",
]
