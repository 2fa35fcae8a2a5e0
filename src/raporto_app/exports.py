"""Dispatch between the two document formats."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from .config import AppConfig
from .docx_export import build_activity_statement, docx_filename
from .export_common import ExportError, save_document
from .models import DailyReportItem
from .xlsx_export import build_attendance_sheet, xlsx_filename


FORMATS = ("docx", "xlsx")


def build_document(fmt: str, items: Sequence[DailyReportItem], config: AppConfig, month: date):
    """Return ``(document, default_filename)`` for the requested format."""

    if fmt == "docx":
        document = build_activity_statement(items, config.contractor_name, config.supervisor_name, month)
        return document, docx_filename(month)
    if fmt == "xlsx":
        workbook = build_attendance_sheet(items, config.contractor_name, month, config.contract_date)
        return workbook, xlsx_filename(month)
    raise ExportError(f"Nieobsługiwany format: {fmt}")


def write_report(
    fmt: str,
    items: Sequence[DailyReportItem],
    config: AppConfig,
    month: date,
    output: Optional[Path | str] = None,
) -> Path:
    """Build the document and save it.

    ``output`` may be a file path, a directory (the default file name is used
    inside it) or ``None`` for the current directory.
    """

    document, filename = build_document(fmt, items, config, month)
    target = Path(output) if output else Path.cwd()
    if target.is_dir():
        target = target / filename
    return save_document(document, target)
