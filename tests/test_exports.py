from datetime import date

import pytest

from raporto_app.config import AppConfig
from raporto_app.export_common import ExportError
from raporto_app.exports import build_document, write_report
from raporto_app.models import DailyReportItem


@pytest.fixture
def items():
    return [DailyReportItem(date(2026, 1, 5), ["a"], "a", 2.0)]


def test_build_document_filenames(items):
    config = AppConfig(contractor_name="Jan Kowalski")

    _, docx_name = build_document("docx", items, config, date(2026, 1, 1))
    _, xlsx_name = build_document("xlsx", items, config, date(2026, 1, 1))

    assert docx_name == "Raport_Czynnosci_2026_01.docx"
    assert xlsx_name == "Ewidencja_Godzin_2026_Styczeń.xlsx"


def test_unknown_format(items):
    with pytest.raises(ExportError):
        build_document("pdf", items, AppConfig(), date(2026, 1, 1))


def test_write_report_defaults_to_current_directory(items, monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)

    path = write_report("docx", items, AppConfig(), date(2026, 1, 1))

    assert path == tmp_path / "Raport_Czynnosci_2026_01.docx"
    assert path.stat().st_size > 0


def test_write_report_to_explicit_file(items, tmp_path):
    target = tmp_path / "nested" / "ewidencja.xlsx"

    assert write_report("xlsx", items, AppConfig(), date(2026, 1, 1), target) == target
    assert target.exists()
