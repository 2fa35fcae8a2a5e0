from datetime import date, timezone, timedelta

import pytest

from raporto_app.models import DailyReportItem, Project, TimeEntry


def test_time_entry_from_api_payload():
    entry = TimeEntry.from_api(
        {
            "id": "abc",
            "description": "Spotkanie",
            "projectId": "p1",
            "timeInterval": {
                "start": "2026-01-05T08:00:00Z",
                "end": "2026-01-05T09:30:00Z",
                "duration": "PT1H30M",
            },
        }
    )

    assert entry.id == "abc"
    assert entry.description == "Spotkanie"
    assert entry.project_id == "p1"
    assert entry.hours == pytest.approx(1.5)
    assert entry.start_date() == date(2026, 1, 5)


def test_time_entry_null_description_becomes_empty():
    entry = TimeEntry.from_api({"id": "x", "description": None, "timeInterval": {"start": "2026-01-05T08:00:00Z"}})

    assert entry.description == ""
    assert entry.end is None
    assert entry.hours == 0.0


def test_hours_fall_back_to_start_and_end():
    entry = TimeEntry(id="x", start="2026-01-05T08:00:00Z", end="2026-01-05T10:15:00Z")

    assert entry.hours == pytest.approx(2.25)


def test_start_date_in_timezone():
    entry = TimeEntry(id="x", start="2026-01-05T23:30:00Z")

    assert entry.start_date() == date(2026, 1, 5)
    assert entry.start_date(timezone(timedelta(hours=1))) == date(2026, 1, 6)


def test_daily_item_rounding_and_default_description():
    item = DailyReportItem(date=date(2026, 1, 5), raw_descriptions=["a", "b"], total_hours=7.5)

    assert item.rounded_hours == 8
    assert item.default_description() == "a, b"


def test_project_from_api():
    project = Project.from_api({"id": "p1", "name": "ICT", "clientId": "c1"})

    assert (project.id, project.name, project.client_id) == ("p1", "ICT", "c1")
