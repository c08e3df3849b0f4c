"""PathTracker - session-based GPS path tracking core."""

__version__ = "0.1.0"
