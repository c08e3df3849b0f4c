"""Timestamp helpers shared by the core and the HTTP boundary."""

from datetime import datetime, timezone
from typing import Union

from .errors import InvalidArgumentError


def utc_now() -> datetime:
    """Current wall-clock time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_aware(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """Parse a caller-supplied event time.

    Args:
        value: Datetime, or ISO-8601 string (a trailing ``Z`` is accepted)

    Returns:
        Timezone-aware datetime

    Raises:
        InvalidArgumentError: If the value cannot be interpreted as a time
    """
    if isinstance(value, datetime):
        return ensure_aware(value)
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"Invalid timestamp: {value!r}")

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return ensure_aware(datetime.fromisoformat(text))
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid timestamp: {value!r}") from e


def isoformat(dt: datetime) -> str:
    """Render a datetime as ISO-8601 with millisecond precision."""
    return ensure_aware(dt).isoformat(timespec="milliseconds")
