"""Shared coercion rules turning arbitrary field values into display strings."""

from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any, Mapping, Optional

from config import ExportConfig
from labels import has_label, label

PRINT_PLACEHOLDER = "-"


def _scalar_text(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        return object.__repr__(value)


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    return _scalar_text(value)


def _compact_json(value: Mapping[Any, Any]) -> str:
    try:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=_json_default)
    except (TypeError, ValueError, RecursionError):
        # non-string keys that json cannot coerce, or circular references
        try:
            flat = {_scalar_text(key): _json_default(item) for key, item in value.items()}
            return json.dumps(flat, ensure_ascii=False, separators=(",", ":"), default=_json_default)
        except Exception:
            return _scalar_text(value)


def normalize_value(value: Any, placeholder: str = "") -> str:
    """Return the display string for one field value. Never raises."""

    return _normalize(value, placeholder, frozenset())


def _normalize(value: Any, placeholder: str, seen: frozenset) -> str:
    if value is None:
        return placeholder
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, set, frozenset)):
        if id(value) in seen:
            # self-referencing container
            return _scalar_text(value)
        items = sorted(value, key=_scalar_text) if isinstance(value, (set, frozenset)) else value
        inner = seen | {id(value)}
        return ", ".join(_normalize(item, "", inner) for item in items)
    if isinstance(value, Mapping):
        return _compact_json(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return _scalar_text(value)


def display_value(value: Any) -> str:
    """Print/document flavour of :func:`normalize_value` (null renders as a dash)."""

    return normalize_value(value, PRINT_PLACEHOLDER)


def format_date_for_export(value: Any, fmt: Optional[str] = None) -> str:
    if value is None or value == "":
        return PRINT_PLACEHOLDER
    fmt = fmt or ExportConfig.DATE_FORMAT
    if isinstance(value, datetime):
        return value.strftime(fmt)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day).strftime(fmt)
    text = normalize_value(value).strip()
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return text
    return parsed.strftime(fmt)


def format_status_for_export(status: Any, locale: Optional[str] = None) -> str:
    code = normalize_value(status).strip()
    key = f"status_{code.lower()}"
    if code and has_label(key):
        return label(key, locale)
    return code
