"""
Export service: the boundary between callers and the export engine.

Each operation renders a document, hands it to a delivery surface and turns
every outcome into an ``ExportOutcome``. Failures are logged with full
context and reported as a status plus a localized message; nothing raises
past this layer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Union

from config import ExportConfig
from delivery import DeliverySurface, FileSystemSurface, deliver_as_file, deliver_as_printable
from errors import ExportError, SurfaceUnavailableError
from labels import label
from logging_utils import get_error_info, log_exception
from models import ColumnLike, DetailSection
from renderers import get_renderer
from renderers.analysis_report import render_analysis_report
from renderers.detail import render_detail

logger = logging.getLogger(__name__)


class ExportStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    SURFACE_UNAVAILABLE = "surface_unavailable"
    FAILED = "failed"


@dataclass
class ExportOutcome:
    status: ExportStatus
    message: str
    location: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status is ExportStatus.OK


def _with_extension(filename: str, extension: str) -> str:
    if extension and not filename.lower().endswith(extension):
        return f"{filename}{extension}"
    return filename


class ReportExporter:
    """Run exports against a delivery surface and report their outcome."""

    def __init__(self, surface: Optional[DeliverySurface] = None, locale: Optional[str] = None) -> None:
        self.surface = surface or FileSystemSurface()
        self.locale = locale or ExportConfig.locale()

    # -- tabular -------------------------------------------------------------

    def export_csv(self, records: Iterable[Any], columns: Iterable[ColumnLike], filename: str) -> ExportOutcome:
        return self._download("csv", records, columns, filename)

    def export_excel(
        self,
        records: Iterable[Any],
        columns: Iterable[ColumnLike],
        filename: str,
        sheet_name: Optional[str] = None,
    ) -> ExportOutcome:
        return self._download("xls", records, columns, filename, title=sheet_name or "")

    def export_pdf(
        self, records: Iterable[Any], columns: Iterable[ColumnLike], filename: str, title: str
    ) -> ExportOutcome:
        return self._print(
            "export_pdf",
            lambda: get_renderer("print", locale=self.locale).render(records, columns, title),
            filename=filename,
        )

    # -- documents -----------------------------------------------------------

    def export_detail_pdf(
        self,
        record: Any,
        sections: Iterable[Union[DetailSection, Mapping[str, Any]]],
        title: str,
    ) -> ExportOutcome:
        return self._print("export_detail_pdf", lambda: render_detail(record, sections, title, locale=self.locale))

    def export_analysis_report(
        self,
        subject_name: str,
        subject_url: Optional[str],
        overall_score: Optional[float],
        result: Any,
        generated_at: Optional[datetime] = None,
    ) -> ExportOutcome:
        return self._print(
            "export_analysis_report",
            lambda: render_analysis_report(
                subject_name, subject_url, overall_score, result, generated_at=generated_at, locale=self.locale
            ),
            subject=subject_name,
        )

    # -- plumbing ------------------------------------------------------------

    def _outcome(self, status: ExportStatus, message_key: str, **kwargs: Any) -> ExportOutcome:
        return ExportOutcome(status=status, message=label(message_key, self.locale), **kwargs)

    def _download(
        self, fmt: str, records: Iterable[Any], columns: Iterable[ColumnLike], filename: str, title: str = ""
    ) -> ExportOutcome:
        operation = f"export_{fmt}"
        try:
            renderer = get_renderer(fmt, locale=self.locale)
            target = _with_extension(filename, renderer.extension)
            content = renderer.render(records, columns, title)
            location = deliver_as_file(content, target, renderer.mime_type, self.surface)
        except Exception as exc:
            return self._failure(exc, operation, filename=filename)
        logger.info("Exported %s to %s", fmt, location)
        return self._outcome(ExportStatus.OK, "export_ready", location=location)

    def _print(self, operation: str, build: Callable[[], str], **context: Any) -> ExportOutcome:
        try:
            markup = build()
            if not deliver_as_printable(markup, self.surface):
                raise SurfaceUnavailableError("Print surface could not be opened")
        except Exception as exc:
            return self._failure(exc, operation, **context)
        location = getattr(self.surface, "last_location", None)
        logger.info("%s ready for printing%s", operation, f" at {location}" if location else "")
        return self._outcome(ExportStatus.OK, "export_ready", location=location)

    def _failure(self, exc: Exception, operation: str, **context: Any) -> ExportOutcome:
        if isinstance(exc, ExportError):
            status = ExportStatus(exc.status)
            if status is ExportStatus.EMPTY:
                logger.info("%s skipped: %s", operation, exc)
            else:
                logger.warning("%s failed: %s", operation, exc)
            return self._outcome(status, exc.message_key, details={"operation": operation, **context})
        log_exception(logger, exc, context=operation, **context)
        details = get_error_info(exc, {"operation": operation, **context})
        return self._outcome(ExportStatus.FAILED, "export_failed", details=details)
