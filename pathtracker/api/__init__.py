"""HTTP boundary for the tracking service."""

from .server import SERVICE_KEY, create_app

__all__ = [
    "SERVICE_KEY",
    "create_app",
]
