"""
Output delivery: hand finished documents to the host environment.

A ``DeliverySurface`` either stores bytes under a filename (downloads) or
presents markup for printing. The file-system surface writes into an output
directory and uses the system browser as its print surface.
"""

from __future__ import annotations

import logging
import os
import re
import webbrowser
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Callable, Optional, Union

from config import ExportConfig
from errors import SurfaceUnavailableError

logger = logging.getLogger(__name__)


def _atomic_write_bytes(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with NamedTemporaryFile("wb", delete=False, dir=str(path.parent)) as tmp:
        tmp.write(data)
        tmp_name = tmp.name
    os.replace(tmp_name, path)


def safe_filename(filename: str, default: str = "export") -> str:
    """Strip directories and characters that are unsafe in file names."""

    name = Path(filename or "").name.strip()
    stem, dot, suffix = name.rpartition(".")
    if not dot:
        stem, suffix = name, ""
    stem = re.sub(r"[^\w\-]+", "_", stem, flags=re.UNICODE).strip("_") or default
    suffix = re.sub(r"[^\w]+", "", suffix)
    return f"{stem}.{suffix}" if suffix else stem


class DeliverySurface(ABC):
    """Capability interface for wherever exports end up."""

    @abstractmethod
    def save(self, data: bytes, filename: str, mime_type: str) -> str:
        """Store ``data`` under ``filename`` and return its location."""

    @abstractmethod
    def present_and_print(self, markup: str) -> bool:
        """Open ``markup`` for printing. Return False when no surface could be opened."""


class FileSystemSurface(DeliverySurface):
    def __init__(
        self,
        output_dir: Optional[str] = None,
        open_browser: Optional[bool] = None,
        opener: Optional[Callable[[str], bool]] = None,
    ) -> None:
        self.output_dir = Path(output_dir or ExportConfig.OUTPUT_DIR)
        self.open_browser = ExportConfig.OPEN_BROWSER if open_browser is None else open_browser
        self.opener = opener or webbrowser.open
        self.last_location: Optional[str] = None

    def save(self, data: bytes, filename: str, mime_type: str) -> str:
        path = self.output_dir / safe_filename(filename)
        _atomic_write_bytes(path, data)
        self.last_location = str(path)
        logger.info("Saved %s (%s, %d bytes)", path, mime_type, len(data))
        return self.last_location

    def present_and_print(self, markup: str) -> bool:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        path = self.output_dir / f"print_{timestamp}.html"
        try:
            _atomic_write_bytes(path, markup.encode("utf-8"))
        except OSError:
            logger.warning("Could not write print document to %s", path, exc_info=True)
            return False
        if not self.open_browser:
            self.last_location = str(path)
            logger.info("Print document written to %s (browser disabled)", path)
            return True
        try:
            opened = bool(self.opener(path.resolve().as_uri()))
        except webbrowser.Error:
            logger.warning("No browser available to print %s", path, exc_info=True)
            opened = False
        if not opened:
            logger.warning("Browser could not open %s; discarding it", path)
            path.unlink(missing_ok=True)
            return False
        self.last_location = str(path)
        return True


def deliver_as_file(
    content: Union[str, bytes], filename: str, mime_type: str, surface: DeliverySurface
) -> str:
    data = content.encode("utf-8") if isinstance(content, str) else content
    return surface.save(data, filename, mime_type)


def deliver_as_printable(markup: str, surface: DeliverySurface) -> bool:
    """Present ``markup`` for printing, reporting failure as ``False``."""

    try:
        return bool(surface.present_and_print(markup))
    except SurfaceUnavailableError:
        logger.warning("Print surface unavailable", exc_info=True)
        return False
    except Exception:
        logger.error("Print surface raised unexpectedly", exc_info=True)
        return False
