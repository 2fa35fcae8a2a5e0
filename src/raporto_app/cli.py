"""Command line entry point: launch the window or export without it."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date, datetime
from typing import Optional, Sequence

from dateutil import tz

from .clockify import ClockifyClient, ClockifyError
from .config import AppConfig
from .export_common import ExportError
from .exports import FORMATS, write_report
from .logging_setup import configure_logging
from .report import ReportState, report_month
from .version import VERSION


logger = logging.getLogger(__name__)


def _month(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m").date()
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM, got {value!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="raporto", description="Clockify monthly report exporter")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("gui", help="open the report window (default)")

    export = sub.add_parser("export", help="fetch entries and write a document")
    export.add_argument("--format", choices=FORMATS, default="docx")
    export.add_argument("--month", type=_month, help="YYYY-MM, default: current month")
    export.add_argument("--output", help="file or directory to write to")
    export.add_argument("--project", help="only count entries of this project id")
    return parser


def run_export(args: argparse.Namespace, config: AppConfig) -> int:
    # Fetch window and day grouping both follow the local calendar
    zone = tz.tzlocal()
    target = args.month or date.today()
    client = ClockifyClient(config.clockify_api_key)
    entries = client.fetch_month(target, zone)
    month = args.month or report_month(entries, today=target, tz=zone)

    state = ReportState()
    state.load(entries, project_id=args.project or config.selected_project_id, tz=zone, month=month)

    path = write_report(args.format, state.items, config, month, args.output)
    print(f"{path} ({len(state)} dni, {state.rounded_total} h)")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    if args.command in (None, "gui"):
        from .app import main as app_main

        app_main()
        return 0

    config = AppConfig.load()
    try:
        return run_export(args, config)
    except (ClockifyError, ExportError) as exc:
        logger.debug("Export failed", exc_info=True)
        print(f"Błąd: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
