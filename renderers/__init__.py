"""Renderer registry."""

from __future__ import annotations

from typing import List, Optional

from .base import BaseRenderer


def _normalized(name: str) -> str:
    return (name or "").strip().lower()


def get_renderer(name: str, locale: Optional[str] = None) -> BaseRenderer:
    normalized = _normalized(name)
    if normalized in {"csv", "delimited"}:
        from .delimited import DelimitedTextRenderer

        return DelimitedTextRenderer(locale=locale)
    if normalized in {"xls", "excel", "spreadsheet"}:
        from .spreadsheet import SpreadsheetRenderer

        return SpreadsheetRenderer(locale=locale)
    if normalized in {"print", "pdf", "html"}:
        from .print_table import PrintTableRenderer

        return PrintTableRenderer(locale=locale)
    raise ValueError(f"Unknown renderer '{name}'")


def available_renderers() -> List[str]:
    return ["csv", "xls", "print"]
