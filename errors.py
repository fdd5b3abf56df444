"""Export failure taxonomy."""

from __future__ import annotations


class ExportError(Exception):
    """Base class for failures that stop a single export operation."""

    status = "failed"
    message_key = "export_failed"


class NothingToExportError(ExportError):
    """Raised when an export is requested for an empty record batch."""

    status = "empty"
    message_key = "nothing_to_export"


class SurfaceUnavailableError(ExportError):
    """Raised when the print/document surface could not be opened."""

    status = "surface_unavailable"
    message_key = "popup_blocked"
