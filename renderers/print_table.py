"""Branded, self-printing HTML table."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable, Optional, Sequence

from labels import label
from models import ColumnLike, coerce_columns
from normalize import display_value

from .base import BaseRenderer, field_value, require_records
from .templates import document_chrome, render_template

logger = logging.getLogger(__name__)


def to_print_document(
    records: Sequence[Any],
    columns: Iterable[ColumnLike],
    title: str,
    generated_at: Optional[datetime] = None,
    locale: Optional[str] = None,
) -> str:
    rows = require_records(records)
    specs = coerce_columns(columns)
    context = document_chrome(title, generated_at=generated_at, locale=locale)
    context.update(
        {
            "record_count": len(rows),
            "total_label": label("total_records", context["locale"]),
            "headers": [spec.header for spec in specs],
            "rows": [[display_value(field_value(record, spec.key)) for spec in specs] for record in rows],
        }
    )
    logger.debug("Built print document '%s': %d rows", title, len(rows))
    return render_template("print_table.html", context)


class PrintTableRenderer(BaseRenderer):
    name = "print"
    format_key = "print"

    def render(self, records: Sequence[Any], columns: Iterable[ColumnLike], title: str = "") -> str:
        return to_print_document(records, columns, title, locale=self.locale)
