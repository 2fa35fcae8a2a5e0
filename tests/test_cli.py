from datetime import date, timedelta, timezone

import pytest
from docx import Document
from openpyxl import load_workbook

from raporto_app import cli
from raporto_app.config import AppConfig
from raporto_app.models import TimeEntry


class FakeClient:
    calls = []

    def __init__(self, api_key):
        self.api_key = api_key

    def fetch_month(self, month=None, tz=None):
        self.calls.append((month, tz))
        return [
            TimeEntry(id="1", start="2026-01-05T08:00:00Z", duration="PT3H", description="A", project_id="p1"),
            TimeEntry(id="2", start="2026-01-06T08:00:00Z", duration="PT2H", description="B", project_id="p2"),
        ]


def test_export_xlsx_writes_into_directory(monkeypatch, tmp_path, capsys):
    AppConfig(clockify_api_key="k", contractor_name="Jan Kowalski").save()
    monkeypatch.setattr(cli, "ClockifyClient", FakeClient)

    code = cli.main(["export", "--format", "xlsx", "--month", "2026-01", "--output", str(tmp_path)])

    assert code == 0
    path = tmp_path / "Ewidencja_Godzin_2026_Styczeń.xlsx"
    assert path.exists()
    sheet = load_workbook(path)["Ewidencja"]
    assert sheet["B11"].value == 3
    assert sheet["B12"].value == 2
    assert "5 h" in capsys.readouterr().out


def test_export_docx_with_project_filter(monkeypatch, tmp_path):
    AppConfig(clockify_api_key="k", contractor_name="Jan Kowalski").save()
    monkeypatch.setattr(cli, "ClockifyClient", FakeClient)
    target = tmp_path / "out" / "raport.docx"

    code = cli.main(["export", "--format", "docx", "--project", "p2", "--output", str(target)])

    assert code == 0
    table = Document(str(target)).tables[0]
    assert len(table.rows) == 3
    assert table.rows[1].cells[1].text == "B"


def test_missing_api_key_reports_error(capsys):
    code = cli.main(["export"])

    assert code == 1
    assert "Wprowadź klucz API Clockify" in capsys.readouterr().err


def test_bad_month_argument_exits():
    with pytest.raises(SystemExit):
        cli.main(["export", "--month", "styczeń"])


class LateEntryClient(FakeClient):
    def fetch_month(self, month=None, tz=None):
        entries = super().fetch_month(month, tz)
        # 00:30 on 1 February in UTC+1
        entries.append(TimeEntry(id="3", start="2026-01-31T23:30:00Z", duration="PT4H", description="Późno"))
        return entries


@pytest.mark.parametrize("fmt", ["xlsx", "docx"])
def test_export_uses_one_local_calendar(monkeypatch, tmp_path, fmt):
    AppConfig(clockify_api_key="k", contractor_name="Jan Kowalski").save()
    zone = timezone(timedelta(hours=1))
    monkeypatch.setattr(cli.tz, "tzlocal", lambda: zone)
    monkeypatch.setattr(cli, "ClockifyClient", LateEntryClient)
    LateEntryClient.calls = []

    code = cli.main(["export", "--format", fmt, "--month", "2026-01", "--output", str(tmp_path / f"raport.{fmt}")])

    assert code == 0
    assert LateEntryClient.calls == [(date(2026, 1, 1), zone)]
    if fmt == "xlsx":
        sheet = load_workbook(tmp_path / "raport.xlsx")["Ewidencja"]
        # 31 January has no hours, the February entry is not on the grid
        assert sheet["B37"].value is None
        assert sheet["B38"].value == "=SUM(B7:B37)"
    else:
        table = Document(str(tmp_path / "raport.docx")).tables[0]
        assert [row.cells[0].text for row in table.rows[1:-1]] == ["2026-01-05", "2026-01-06"]
        assert table.rows[-1].cells[2].text == "5"
