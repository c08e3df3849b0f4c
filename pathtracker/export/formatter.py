"""Export a session's raw point sequence as a structured record or GPX track."""

import logging
import xml.etree.ElementTree as ET
from enum import Enum
from typing import Any, Dict, Sequence, Union

from ..errors import InvalidArgumentError
from ..geo.stats import compute_stats
from ..models.location import LocationPoint
from ..models.session import TrackingSession
from ..timeutils import isoformat

logger = logging.getLogger(__name__)

GPX_NAMESPACE = "http://www.topografix.com/GPX/1/1"
GPX_CONTENT_TYPE = "application/gpx+xml"
GPX_CREATOR = "PathTracker"


class ExportFormat(Enum):
    """Supported export representations."""
    STRUCTURED = "structured"
    TRACK_FILE = "track-file"

    @classmethod
    def parse(cls, value: Union[str, "ExportFormat", None]) -> "ExportFormat":
        """Resolve a format name; ``json`` and ``gpx`` are accepted aliases."""
        if value is None:
            return cls.STRUCTURED
        if isinstance(value, cls):
            return value
        aliases = {"json": cls.STRUCTURED, "gpx": cls.TRACK_FILE}
        name = str(value).strip().lower()
        if name in aliases:
            return aliases[name]
        try:
            return cls(name)
        except ValueError:
            raise InvalidArgumentError(f"Unsupported export format: {value!r}") from None


def track_filename(session_id: str) -> str:
    return f"track_{session_id}.gpx"


def to_structured(session: TrackingSession, points: Sequence[LocationPoint]) -> Dict[str, Any]:
    """Session metadata, the unmodified point sequence and its statistics."""
    return {
        "session": session.to_dict(),
        "locations": [point.to_dict() for point in points],
        "stats": compute_stats(points).to_dict(),
    }


def to_gpx(session: TrackingSession, points: Sequence[LocationPoint]) -> str:
    """Render the points as a single-track, single-segment GPX 1.1 document.

    The document is well-formed for an empty sequence (empty segment).
    """
    gpx = ET.Element("gpx", {
        "version": "1.1",
        "creator": GPX_CREATOR,
        "xmlns": GPX_NAMESPACE,
    })
    trk = ET.SubElement(gpx, "trk")
    ET.SubElement(trk, "name").text = f"Track {session.session_id}"
    trkseg = ET.SubElement(trk, "trkseg")

    for point in points:
        trkpt = ET.SubElement(trkseg, "trkpt", {
            "lat": repr(point.latitude),
            "lon": repr(point.longitude),
        })
        ET.SubElement(trkpt, "time").text = isoformat(point.timestamp)

    ET.indent(gpx, space="  ")
    body = ET.tostring(gpx, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'


def export_session(session: TrackingSession,
                   points: Sequence[LocationPoint],
                   fmt: Union[str, ExportFormat, None] = ExportFormat.STRUCTURED) -> Union[Dict[str, Any], str]:
    """Export a session in the requested format.

    No path simplification is applied: the export always reflects the raw
    recorded sequence.

    Args:
        session: Session metadata
        points: Raw point sequence in recorded order
        fmt: ``structured`` (default) or ``track-file``

    Returns:
        A JSON-ready dict for ``structured``, a GPX string for ``track-file``

    Raises:
        InvalidArgumentError: If the format is unknown
    """
    export_format = ExportFormat.parse(fmt)
    logger.debug(f"Exporting session {session.session_id} as {export_format.value} "
                 f"({len(points)} points)")
    if export_format is ExportFormat.TRACK_FILE:
        return to_gpx(session, points)
    return to_structured(session, points)
