"""Delimited-text (CSV) export."""

from __future__ import annotations

import csv
import io
import logging
from typing import Any, Iterable, Sequence

from config import ExportConfig
from models import ColumnLike, coerce_columns
from normalize import normalize_value

from .base import BaseRenderer, field_value, require_records

logger = logging.getLogger(__name__)


def to_delimited_text(records: Sequence[Any], columns: Iterable[ColumnLike]) -> str:
    """Header row plus one row per record, every cell quoted, BOM-prefixed.

    Embedded quotes are doubled and embedded newlines stay inside the quoted
    cell, so any spreadsheet or ``csv.reader`` recovers the original values.
    """

    rows = require_records(records)
    specs = coerce_columns(columns)
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow([spec.header for spec in specs])
    for record in rows:
        writer.writerow([normalize_value(field_value(record, spec.key)) for spec in specs])
    body = buffer.getvalue()
    if body.endswith("\n"):
        body = body[:-1]
    logger.debug("Built delimited export: %d rows x %d columns", len(rows), len(specs))
    return ExportConfig.CSV_BOM + body


class DelimitedTextRenderer(BaseRenderer):
    name = "csv"
    format_key = "csv"

    def render(self, records: Sequence[Any], columns: Iterable[ColumnLike], title: str = "") -> str:
        return to_delimited_text(records, columns)
