"""
Export Engine Configuration

Minimal configuration surface for the admin export engine. Values are read from
the environment (and an optional .env file) once at import so every renderer
sees the same branding, locale and output settings.
"""

import os
from typing import Dict, List

from dotenv import load_dotenv

load_dotenv()


class ExportConfig:
    """Branding, locale and delivery settings shared by every exporter."""

    BRAND_NAME = os.getenv("EXPORT_BRAND_NAME", "UNILANCER")
    ACCENT_COLOR = os.getenv("EXPORT_ACCENT_COLOR", "#5FC8DA")
    BODY_FONT = "'Segoe UI', Tahoma, Geneva, Verdana, sans-serif"
    LOCALE = os.getenv("EXPORT_LOCALE", "tr").strip().lower() or "tr"
    SUPPORTED_LOCALES = ("tr", "en")

    # Output
    OUTPUT_DIR = os.getenv("EXPORT_OUTPUT_DIR", "exports")
    DATE_FORMAT = os.getenv("EXPORT_DATE_FORMAT", "%d.%m.%Y %H:%M")
    DEFAULT_SHEET_NAME = os.getenv("EXPORT_DEFAULT_SHEET", "Sheet1")
    OPEN_BROWSER = os.getenv("EXPORT_OPEN_BROWSER", "true").lower() != "false"
    LOG_LEVEL = os.getenv("EXPORT_LOG_LEVEL", "INFO").upper()

    CSV_BOM = "\ufeff"
    MIME_TYPES: Dict[str, str] = {
        "csv": "text/csv;charset=utf-8;",
        "xls": "application/vnd.ms-excel;charset=utf-8;",
        "print": "text/html;charset=utf-8;",
    }
    FILE_EXTENSIONS: Dict[str, str] = {
        "csv": ".csv",
        "xls": ".xls",
        "print": ".html",
    }

    # Analysis report vocabulary
    SOCIAL_PLATFORMS: List[str] = ["linkedin", "instagram", "facebook", "twitter", "youtube", "tiktok"]
    COMPLIANCE_FLAGS: List[str] = ["kvkk", "cookie_policy", "etbis"]

    @classmethod
    def locale(cls) -> str:
        return cls.LOCALE if cls.LOCALE in cls.SUPPORTED_LOCALES else "en"

    @classmethod
    def mime_type(cls, fmt: str) -> str:
        return cls.MIME_TYPES.get(fmt, "application/octet-stream")

    @classmethod
    def file_extension(cls, fmt: str) -> str:
        return cls.FILE_EXTENSIONS.get(fmt, "")
