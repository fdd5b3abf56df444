"""Single-record detail document with titled sections of labeled fields."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from models import DetailSection, FieldSpec, coerce_sections
from normalize import display_value

from .base import field_value
from .templates import document_chrome, render_template

logger = logging.getLogger(__name__)


def _field_text(record: Any, field: FieldSpec) -> str:
    value = field_value(record, field.key)
    if field.formatter is None:
        return display_value(value)
    try:
        return display_value(field.formatter(value))
    except Exception:
        logger.warning("Formatter for field '%s' failed; using raw value", field.key, exc_info=True)
        return display_value(value)


def render_detail(
    record: Any,
    sections: Iterable[Union[DetailSection, Mapping[str, Any]]],
    title: str,
    generated_at: Optional[datetime] = None,
    locale: Optional[str] = None,
) -> str:
    """Render one record as a print document.

    Every field of every section is emitted, absent values included (shown as
    ``-``), so the document always mirrors the section schema.
    """

    built: List[Dict[str, Any]] = []
    for section in coerce_sections(sections):
        built.append(
            {
                "title": section.title,
                "fields": [{"label": field.label, "value": _field_text(record, field)} for field in section.fields],
            }
        )
    context = document_chrome(title, generated_at=generated_at, locale=locale)
    context["sections"] = built
    return render_template("detail.html", context)
