#!/usr/bin/env python3
"""
CLI entrypoint for the export engine.

    python run_export.py table records.json --format csv --columns name:Name email:E-mail
    python run_export.py analysis result.json --subject "Acme" --url https://acme.example --score 72
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from config import ExportConfig
from delivery import FileSystemSurface
from export_service import ExportOutcome, ExportStatus, ReportExporter
from logging_utils import log_exception, setup_export_logging
from models import ColumnSpec


def enable_debug_logging() -> None:
    logging.getLogger().setLevel(logging.DEBUG)
    for logger_name in logging.Logger.manager.loggerDict:
        logging.getLogger(logger_name).setLevel(logging.DEBUG)


def parse_column(value: str) -> ColumnSpec:
    key, sep, header = value.partition(":")
    if not key.strip():
        raise argparse.ArgumentTypeError(f"Invalid column '{value}', expected key:Header")
    return ColumnSpec(key=key.strip(), header=header.strip() if sep and header.strip() else key.strip())


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export records and analysis results as documents.")
    parser.add_argument("--output-dir", default=ExportConfig.OUTPUT_DIR, help="Directory for exported files.")
    parser.add_argument("--no-browser", action="store_true", help="Write print documents without opening them.")
    parser.add_argument("--debug", action="store_true", help="Enable verbose logging.")
    commands = parser.add_subparsers(dest="command", required=True)

    table = commands.add_parser("table", help="Export a JSON list of records.")
    table.add_argument("input", type=Path, help="JSON file holding a list of records.")
    table.add_argument("--format", choices=["csv", "xls", "print"], default="csv")
    table.add_argument("--columns", nargs="+", type=parse_column, help="Columns as key:Header pairs.")
    table.add_argument("--filename", default="export", help="Output file name (extension added).")
    table.add_argument("--title", default="Export", help="Title of the print document.")
    table.add_argument("--sheet", default=None, help="Worksheet name for xls exports.")

    analysis = commands.add_parser("analysis", help="Export a digital analysis report.")
    analysis.add_argument("input", type=Path, help="JSON file holding the analysis result.")
    analysis.add_argument("--subject", required=True, help="Name of the analysed company.")
    analysis.add_argument("--url", default=None, help="Website of the analysed company.")
    analysis.add_argument("--score", type=float, default=None, help="Overall digital score (0-100).")
    return parser.parse_args(argv)


def load_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def infer_columns(records: List[Any]) -> List[ColumnSpec]:
    keys: List[str] = []
    for record in records:
        if isinstance(record, dict):
            keys.extend(key for key in record if key not in keys)
    return [ColumnSpec(key=key, header=key) for key in keys]


def run(args: argparse.Namespace, exporter: ReportExporter) -> ExportOutcome:
    payload = load_json(args.input)
    if args.command == "analysis":
        return exporter.export_analysis_report(args.subject, args.url, args.score, payload)

    records = payload if isinstance(payload, list) else [payload]
    columns = args.columns or infer_columns(records)
    if args.format == "csv":
        return exporter.export_csv(records, columns, args.filename)
    if args.format == "xls":
        return exporter.export_excel(records, columns, args.filename, sheet_name=args.sheet)
    return exporter.export_pdf(records, columns, args.filename, args.title)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    run_logger, log_path = setup_export_logging(
        args.output_dir, f"{args.command} {args.input}", level=ExportConfig.LOG_LEVEL
    )
    if args.debug:
        enable_debug_logging()
        run_logger.debug("Debug logging enabled.")

    surface = FileSystemSurface(args.output_dir, open_browser=not args.no_browser)
    exporter = ReportExporter(surface)

    try:
        outcome = run(args, exporter)
    except (OSError, ValueError) as exc:
        log_exception(run_logger, exc, context="load_input", input=str(args.input))
        print(f"❌ Could not read {args.input}. Check {log_path} for details.")
        return 1

    if outcome.status is ExportStatus.OK:
        print(f"✅ {outcome.message} {outcome.location or ''}".rstrip())
        return 0
    print(f"❌ {outcome.message}")
    return 2 if outcome.status is ExportStatus.EMPTY else 1


if __name__ == "__main__":
    sys.exit(main())
