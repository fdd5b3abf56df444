"""Base classes for multi-format export renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from config import ExportConfig
from errors import NothingToExportError
from models import ColumnLike

_MISSING = object()


def field_value(record: Any, key: str) -> Any:
    """Read ``key`` from a mapping or attribute-style record.

    Dotted keys (``company.name``) walk nested records when the literal key
    is not present. Missing fields read as ``None``.
    """

    value = _lookup(record, key)
    if value is not _MISSING:
        return value
    if "." not in key:
        return None
    current = record
    for part in key.split("."):
        current = _lookup(current, part)
        if current is _MISSING:
            return None
    return current


def _lookup(record: Any, key: str) -> Any:
    if record is None:
        return _MISSING
    if isinstance(record, Mapping):
        return record.get(key, _MISSING)
    return getattr(record, key, _MISSING)


def require_records(records: Optional[Iterable[Any]]) -> List[Any]:
    rows = list(records or [])
    if not rows:
        raise NothingToExportError("No records to export")
    return rows


class BaseRenderer(ABC):
    """Shared interface for any tabular export renderer."""

    name: str = "base"
    format_key: str = "print"

    def __init__(self, locale: Optional[str] = None) -> None:
        self.locale = locale

    @property
    def extension(self) -> str:
        return ExportConfig.file_extension(self.format_key)

    @property
    def mime_type(self) -> str:
        return ExportConfig.mime_type(self.format_key)

    @abstractmethod
    def render(self, records: Sequence[Any], columns: Iterable[ColumnLike], title: str = "") -> str:
        """Render the batch into a complete document and return it as text."""
