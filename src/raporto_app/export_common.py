"""Helpers shared by the Word and Excel exporters."""

from __future__ import annotations

from datetime import date
from io import BytesIO
from pathlib import Path
from typing import List, Protocol, Sequence

from .models import DailyReportItem


# Nominative month names, as printed on Polish forms ("styczeń 2026")
POLISH_MONTHS = (
    "styczeń",
    "luty",
    "marzec",
    "kwiecień",
    "maj",
    "czerwiec",
    "lipiec",
    "sierpień",
    "wrzesień",
    "październik",
    "listopad",
    "grudzień",
)


class ExportError(RuntimeError):
    """The report cannot be exported."""


class _Saveable(Protocol):
    def save(self, target) -> None: ...


def polish_month_name(month: date, capitalize: bool = False) -> str:
    name = POLISH_MONTHS[month.month - 1]
    return name.capitalize() if capitalize else name


def in_month(day: date, month: date) -> bool:
    return (day.year, day.month) == (month.year, month.month)


def items_in_month(items: Sequence[DailyReportItem], month: date) -> List[DailyReportItem]:
    """Rows that belong to the month containing ``month``."""

    return [item for item in items if in_month(item.date, month)]


def require_items(items: Sequence[DailyReportItem]) -> None:
    """Refuse to build a document out of an empty report."""

    if not items:
        raise ExportError("Brak danych do wyeksportowania.")


def to_bytes(document: _Saveable) -> bytes:
    """Serialise a python-docx ``Document`` or openpyxl ``Workbook`` in memory."""

    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def save_document(document: _Saveable, path: Path | str) -> Path:
    """Write the document to ``path``, creating parent folders as needed."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    document.save(str(target))
    return target
