"""Excel export: attendance grid for a commission contract ("Ewidencja godzin").

The sheet lists every day of the month with its rounded hours and closes with
a ``SUM`` formula, so totals stay correct after hand edits in Excel.
"""

from __future__ import annotations

import calendar
import logging
from datetime import date
from typing import Dict, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, Side

from .export_common import in_month, items_in_month, polish_month_name, require_items
from .models import DailyReportItem


logger = logging.getLogger(__name__)

SHEET_TITLE = "Ewidencja"
DEFAULT_CONTRACT_DATE = "5.01.2026"
COLUMN_WIDTHS = {"A": 8, "B": 25, "C": 25, "D": 30}
HEADER_ROW = 6
FIRST_DATA_ROW = HEADER_ROW + 1

HEADERS = (
    "Dzień miesiąca",
    "Liczba godzin wykonywania umowy zlecenia",
    "Uwagi",
    "Podpis Zleceniobiorcy",
)

_THIN = Side(style="thin")
BORDER = Border(top=_THIN, left=_THIN, bottom=_THIN, right=_THIN)
CENTER = Alignment(horizontal="center", vertical="center", wrap_text=True)
FONT = Font(name="Arial", size=10)
FONT_BOLD = Font(name="Arial", size=10, bold=True)


def xlsx_filename(month: date) -> str:
    return f"Ewidencja_Godzin_{month.year}_{polish_month_name(month, capitalize=True)}.xlsx"


def _hours_by_day(items: Sequence[DailyReportItem], month: date) -> Dict[int, int]:
    """Rounded hours keyed by day of month; other months are ignored."""

    hours: Dict[int, int] = {}
    for item in items:
        if not in_month(item.date, month):
            logger.debug("Skipping %s, outside %02d/%d", item.date, month.month, month.year)
            continue
        hours[item.date.day] = item.rounded_hours
    return hours


def _merged_line(sheet, row: int, text: str, font: Font):
    sheet.merge_cells(start_row=row, start_column=1, end_row=row, end_column=4)
    cell = sheet.cell(row=row, column=1)
    cell.value = text
    cell.font = font
    return cell


def _configure_page(sheet) -> None:
    sheet.page_setup.paperSize = sheet.PAPERSIZE_A4
    sheet.page_setup.orientation = sheet.ORIENTATION_PORTRAIT
    # Whole grid on a single A4 page
    sheet.sheet_properties.pageSetUpPr.fitToPage = True
    sheet.page_setup.fitToWidth = 1
    sheet.page_setup.fitToHeight = 1

    margins = sheet.page_margins
    margins.left = margins.right = margins.top = margins.bottom = 0.5
    margins.header = margins.footer = 0.3

    for column, width in COLUMN_WIDTHS.items():
        sheet.column_dimensions[column].width = width


def _footer_line(sheet, row: int, text: str, font: Font | None = None, vertical: str | None = None) -> None:
    cell = sheet.cell(row=row, column=4)
    cell.value = text
    if font is not None:
        cell.font = font
    cell.alignment = Alignment(horizontal="center", vertical=vertical)


def build_attendance_sheet(
    items: Sequence[DailyReportItem],
    contractor_name: str,
    month: date,
    contract_date: str = DEFAULT_CONTRACT_DATE,
) -> Workbook:
    """Build the attendance workbook for the month containing ``month``."""

    require_items(items_in_month(items, month))

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = SHEET_TITLE
    _configure_page(sheet)

    title = _merged_line(
        sheet,
        1,
        f"Ewidencja godzin wykonywania umowy zlecenia zawartej w dniu {contract_date or DEFAULT_CONTRACT_DATE}",
        Font(name="Arial", size=12, bold=True),
    )
    title.alignment = Alignment(horizontal="center", vertical="center")

    # Row 2 stays empty
    _merged_line(sheet, 3, f"Miesiąc: {polish_month_name(month, capitalize=True)} {month.year} r.", FONT)
    _merged_line(sheet, 4, f"Nazwisko i imię Zleceniobiorcy: {contractor_name}", FONT)

    # Row 5 stays empty
    for column, label in enumerate(HEADERS, start=1):
        cell = sheet.cell(row=HEADER_ROW, column=column, value=label)
        cell.font = FONT_BOLD
        cell.alignment = CENTER
        cell.border = BORDER
    sheet.row_dimensions[HEADER_ROW].height = 40

    hours = _hours_by_day(items, month)
    days_in_month = calendar.monthrange(month.year, month.month)[1]
    row = FIRST_DATA_ROW
    for day in range(1, days_in_month + 1):
        # Zero hours leave the cell empty so the column stays numeric for SUM
        values = (day, hours.get(day) or None, None, None)
        for column, value in enumerate(values, start=1):
            cell = sheet.cell(row=row, column=column, value=value)
            cell.font = FONT
            cell.alignment = CENTER
            cell.border = BORDER
        sheet.row_dimensions[row].height = 18
        row += 1
    last_data_row = row - 1

    summary_row = row
    label = sheet.cell(row=summary_row, column=1, value="Liczba godzin wykonywania umowy zlecenia ogółem:")
    label.font = FONT_BOLD
    label.alignment = CENTER
    total = sheet.cell(row=summary_row, column=2, value=f"=SUM(B{FIRST_DATA_ROW}:B{last_data_row})")
    total.font = Font(name="Arial", size=12, bold=True)
    total.alignment = CENTER
    for column in range(1, 5):
        sheet.cell(row=summary_row, column=column).border = BORDER
    sheet.row_dimensions[summary_row].height = 45

    # Two spacer rows, then the acceptance block in column D
    row = summary_row + 3
    confirm_font = Font(name="Arial", size=9, bold=True)
    _footer_line(sheet, row, "Powyższe zestawienie godzin wykonywania", confirm_font)
    _footer_line(sheet, row + 1, "umowy potwierdzam:", confirm_font)
    _footer_line(sheet, row + 3, "...........................................................")
    _footer_line(sheet, row + 4, "(data i podpis przyjmującego pracę)", Font(name="Arial", size=8), "top")

    logger.info(
        "Built attendance sheet for %02d/%d: %d days with hours", month.month, month.year, len(hours)
    )
    return workbook
