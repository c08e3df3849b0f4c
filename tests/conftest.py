"""Pytest configuration and fixtures for PathTracker tests."""

import pytest
import tempfile
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

from pubsub import pub

from pathtracker.config import PathTrackerConfig
from pathtracker.events.publisher import (
    LOCATION_RECORDED,
    SESSION_EXPIRED,
    SESSION_STARTED,
    SESSION_STOPPED,
)
from pathtracker.models.location import LocationPoint
from pathtracker.services.tracking_service import TrackingService
from pathtracker.storage.point_store import PointStore
from pathtracker.storage.session_store import SessionStore


# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

T0 = datetime(2025, 6, 1, 8, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Controllable replacement for utc_now."""

    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


def make_point(lat: float, lon: float, seconds: float = 0.0, accuracy=None) -> LocationPoint:
    """Build a point whose event time is ``seconds`` after T0."""
    ts = T0 + timedelta(seconds=seconds)
    return LocationPoint(latitude=lat, longitude=lon, timestamp=ts, received_at=ts, accuracy=accuracy)


@pytest.fixture
def temp_data_dir():
    """Create temporary directory for test data."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def point_store():
    return PointStore()


@pytest.fixture
def session_store(point_store):
    return SessionStore(point_store)


@pytest.fixture
def tracking_service(clock):
    """Tracking service with default config and a fake clock."""
    return TrackingService(PathTrackerConfig(), clock=clock)


@pytest.fixture
def write_config(temp_data_dir):
    """Write YAML text to a config file and return its path."""
    def _write(text: str, name: str = "pathtracker.yaml") -> str:
        path = Path(temp_data_dir) / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write


class EventCollector:
    """Records every pub/sub event delivered on the lifecycle topics."""

    def __init__(self):
        self.events = []

    def _on_started(self, event):
        self.events.append((SESSION_STARTED, event))

    def _on_stopped(self, event):
        self.events.append((SESSION_STOPPED, event))

    def _on_expired(self, event):
        self.events.append((SESSION_EXPIRED, event))

    def _on_location(self, event):
        self.events.append((LOCATION_RECORDED, event))

    def topics(self):
        return [topic for topic, _ in self.events]


@pytest.fixture
def event_collector():
    """Subscribe a collector to all lifecycle topics for one test."""
    collector = EventCollector()
    pub.subscribe(collector._on_started, SESSION_STARTED)
    pub.subscribe(collector._on_stopped, SESSION_STOPPED)
    pub.subscribe(collector._on_expired, SESSION_EXPIRED)
    pub.subscribe(collector._on_location, LOCATION_RECORDED)
    yield collector
    pub.unsubAll()


@pytest.fixture
def point_factory():
    """Factory for points timed relative to T0."""
    return make_point


@pytest.fixture
def t0():
    return T0


class FailingListener:
    """Listener that raises on every lifecycle topic."""

    def __init__(self):
        self.calls = 0

    def on_event(self, event):
        self.calls += 1
        raise RuntimeError("listener failure")


@pytest.fixture
def failing_listener():
    """Subscribe a raising listener to all lifecycle topics for one test."""
    listener = FailingListener()
    for topic in (SESSION_STARTED, SESSION_STOPPED, SESSION_EXPIRED, LOCATION_RECORDED):
        pub.subscribe(listener.on_event, topic)
    yield listener
    pub.unsubAll()
