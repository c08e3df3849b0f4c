"""Pub/sub notifications for session lifecycle changes."""

from .publisher import (
    LOCATION_RECORDED,
    SESSION_EXPIRED,
    SESSION_STARTED,
    SESSION_STOPPED,
    SessionEventPublisher,
)

__all__ = [
    "SessionEventPublisher",
    "SESSION_STARTED",
    "SESSION_STOPPED",
    "SESSION_EXPIRED",
    "LOCATION_RECORDED",
]
