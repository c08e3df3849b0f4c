"""Session export formats."""

from .formatter import (
    GPX_CONTENT_TYPE,
    ExportFormat,
    export_session,
    to_gpx,
    to_structured,
    track_filename,
)

__all__ = [
    "GPX_CONTENT_TYPE",
    "ExportFormat",
    "export_session",
    "to_gpx",
    "to_structured",
    "track_filename",
]
