"""Word export: monthly activity statement ("Zestawienie czynności").

Layout:
- page header with the client's name on the left and the contract annex note
  on the right (borderless table);
- centred title with the month as ``MM/YYYY``;
- table Data / Opis / Godziny with an orange header and a grey "Suma:" row
  whose label spans two columns;
- signature lines for the contractor and the accepting person.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from docx import Document
from docx.enum.style import WD_STYLE_TYPE
from docx.enum.table import WD_ALIGN_VERTICAL
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Emu, Pt

from .durations import round_hours
from .export_common import items_in_month, require_items
from .models import DailyReportItem


logger = logging.getLogger(__name__)

HEADER_FILL = "FF6600"
SUM_FILL = "EEEEEE"
COLUMN_SHARES = (0.15, 0.75, 0.10)
SIGNATURE_LINE = "___________________________________________"
DEFAULT_COMPANY = "PTE"

# Custom paragraph styles
STYLE_TABLE_HEADER = "Raport Table Header"
STYLE_TABLE_TEXT = "Raport Table Text"
STYLE_TABLE_BOLD = "Raport Table Bold"


def docx_filename(month: date) -> str:
    return f"Raport_Czynnosci_{month.year}_{month.month:02d}.docx"


def _shade(cell, fill: str) -> None:
    """Fill a table cell with a solid background colour."""

    tc_pr = cell._tc.get_or_add_tcPr()
    shd = OxmlElement("w:shd")
    shd.set(qn("w:val"), "clear")
    shd.set(qn("w:color"), "auto")
    shd.set(qn("w:fill"), fill)
    tc_pr.append(shd)


def _write_cell(cell, text: str, style: str, valign=WD_ALIGN_VERTICAL.TOP) -> None:
    cell.text = text
    cell.paragraphs[0].style = style
    cell.vertical_alignment = valign


def _configure_styles(document) -> None:
    styles = document.styles

    normal = styles["Normal"]
    normal.font.name = "Arial"
    normal.font.size = Pt(11)
    # East-Asian font slot too, otherwise Word keeps the theme font there
    r_pr = normal.element.get_or_add_rPr()
    r_fonts = r_pr.find(qn("w:rFonts"))
    if r_fonts is None:
        r_fonts = OxmlElement("w:rFonts")
        r_pr.append(r_fonts)
    r_fonts.set(qn("w:eastAsia"), "Arial")

    header = styles.add_style(STYLE_TABLE_HEADER, WD_STYLE_TYPE.PARAGRAPH)
    header.base_style = normal
    header.font.bold = True
    header.font.size = Pt(11)
    header.paragraph_format.alignment = WD_ALIGN_PARAGRAPH.LEFT

    text = styles.add_style(STYLE_TABLE_TEXT, WD_STYLE_TYPE.PARAGRAPH)
    text.base_style = normal
    text.font.size = Pt(11)
    text.paragraph_format.space_before = Pt(2.5)
    text.paragraph_format.space_after = Pt(2.5)

    bold = styles.add_style(STYLE_TABLE_BOLD, WD_STYLE_TYPE.PARAGRAPH)
    bold.base_style = normal
    bold.font.bold = True
    bold.font.size = Pt(11)


def _build_page_header(section) -> None:
    header = section.header
    width = section.page_width - section.left_margin - section.right_margin
    table = header.add_table(rows=1, cols=2, width=width)

    left, right = table.rows[0].cells
    left.vertical_alignment = WD_ALIGN_VERTICAL.CENTER
    run = left.paragraphs[0].add_run("Pracownicze Towarzystwo\nEmerytalne")
    run.bold = True
    run.font.size = Pt(10)

    right.vertical_alignment = WD_ALIGN_VERTICAL.CENTER
    paragraph = right.paragraphs[0]
    paragraph.alignment = WD_ALIGN_PARAGRAPH.RIGHT
    paragraph.add_run("Załącznik do Umowy o świadczenie usług").font.size = Pt(10)

    spacer = header.add_paragraph()
    spacer.paragraph_format.space_after = Pt(20)


def _build_title(document, month: date) -> None:
    paragraph = document.add_paragraph()
    paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
    paragraph.paragraph_format.space_after = Pt(20)

    lead = paragraph.add_run("Zestawienie czynności wykonanych w miesiącu ")
    lead.bold = True
    lead.font.size = Pt(14)

    period = paragraph.add_run(f"{month.month:02d}/{month.year}")
    period.bold = True
    period.underline = True
    period.font.size = Pt(14)


def _build_table(document, items: Sequence[DailyReportItem], text_width: int) -> None:
    table = document.add_table(rows=1, cols=3)
    table.style = "Table Grid"

    widths = [Emu(int(text_width * share)) for share in COLUMN_SHARES]
    for cell, label in zip(table.rows[0].cells, ("Data", "Opis", "Godziny")):
        _write_cell(cell, label, STYLE_TABLE_HEADER, WD_ALIGN_VERTICAL.CENTER)
        _shade(cell, HEADER_FILL)

    for item in items:
        cells = table.add_row().cells
        _write_cell(cells[0], item.date.isoformat(), STYLE_TABLE_TEXT)
        _write_cell(cells[1], item.final_description, STYLE_TABLE_TEXT)
        _write_cell(cells[2], str(item.rounded_hours), STYLE_TABLE_TEXT)

    for row in table.rows:
        for cell, width in zip(row.cells, widths):
            cell.width = width

    total = round_hours(sum(item.total_hours for item in items))
    sum_row = table.add_row()
    value_cell = sum_row.cells[2]
    value_cell.width = widths[2]
    label_cell = sum_row.cells[0].merge(sum_row.cells[1])
    label_cell.width = Emu(widths[0] + widths[1])
    _write_cell(label_cell, "Suma:", STYLE_TABLE_BOLD)
    _shade(label_cell, SUM_FILL)
    _write_cell(value_cell, str(total), STYLE_TABLE_BOLD)
    _shade(value_cell, SUM_FILL)


def _add_line(document, text: str, size: float | None = None, space_after: float | None = None):
    paragraph = document.add_paragraph()
    run = paragraph.add_run(text)
    if size is not None:
        run.font.size = Pt(size)
    if space_after is not None:
        paragraph.paragraph_format.space_after = Pt(space_after)
    return paragraph


def _build_signatures(document, contractor_name: str, company_name: str) -> None:
    spacer = document.add_paragraph()
    spacer.paragraph_format.space_after = Pt(30)

    _add_line(document, contractor_name, space_after=5)
    _add_line(document, SIGNATURE_LINE, space_after=2.5)
    _add_line(document, "Podpis Kontrahenta", size=9, space_after=20)

    _add_line(document, SIGNATURE_LINE, space_after=2.5)
    _add_line(
        document,
        f"Podpis osoby akceptującej zestawienie w imieniu {company_name or DEFAULT_COMPANY}",
        size=9,
    )

    page = _add_line(document, "Strona 1 z 1", size=8)
    page.alignment = WD_ALIGN_PARAGRAPH.RIGHT
    page.paragraph_format.space_before = Pt(30)
    kind = _add_line(document, "B2B", size=8)
    kind.alignment = WD_ALIGN_PARAGRAPH.RIGHT


def build_activity_statement(
    items: Sequence[DailyReportItem],
    contractor_name: str,
    company_name: str,
    month: date,
):
    """Build the activity statement and return the python-docx ``Document``.

    ``month`` may be any day of the reported month; rows of other months are
    left out, as on the Excel grid.
    """

    items = items_in_month(items, month)
    require_items(items)

    document = Document()
    _configure_styles(document)

    section = document.sections[0]
    text_width = section.page_width - section.left_margin - section.right_margin
    _build_page_header(section)
    _build_title(document, month)
    _build_table(document, items, text_width)
    _build_signatures(document, contractor_name, company_name)

    logger.info("Built activity statement for %02d/%d with %d rows", month.month, month.year, len(items))
    return document
