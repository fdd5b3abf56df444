"""Spreadsheet-compatible HTML table export (opens in Excel as a workbook)."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence

from config import ExportConfig
from models import ColumnLike, coerce_columns
from normalize import normalize_value

from .base import BaseRenderer, field_value, require_records
from .templates import render_template

logger = logging.getLogger(__name__)


def to_spreadsheet_markup(
    records: Sequence[Any],
    columns: Iterable[ColumnLike],
    sheet_name: Optional[str] = None,
) -> str:
    rows = require_records(records)
    specs = coerce_columns(columns)
    context = {
        "sheet_name": sheet_name or ExportConfig.DEFAULT_SHEET_NAME,
        "accent": ExportConfig.ACCENT_COLOR,
        "headers": [spec.header for spec in specs],
        "rows": [[normalize_value(field_value(record, spec.key)) for spec in specs] for record in rows],
    }
    logger.debug("Built spreadsheet export '%s': %d rows", context["sheet_name"], len(rows))
    return render_template("spreadsheet.html", context)


class SpreadsheetRenderer(BaseRenderer):
    name = "xls"
    format_key = "xls"

    def render(self, records: Sequence[Any], columns: Iterable[ColumnLike], title: str = "") -> str:
        return to_spreadsheet_markup(records, columns, sheet_name=title or None)
