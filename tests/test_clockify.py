from datetime import date, timedelta, timezone

import pytest
import requests

from raporto_app.clockify import ClockifyClient, ClockifyError, month_range


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code
        self.text = str(payload)

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, routes):
        self.routes = routes
        self.headers = {}
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params))
        result = self.routes[url.rsplit("/api/v1", 1)[1]]
        if isinstance(result, Exception):
            raise result
        return result


USER = {"id": "u1", "activeWorkspace": "w1", "defaultWorkspace": "w0"}
ENTRY = {
    "id": "e1",
    "description": "Spotkanie",
    "projectId": "p1",
    "timeInterval": {"start": "2026-01-05T08:00:00Z", "end": "2026-01-05T09:00:00Z", "duration": "PT1H"},
}


def test_requires_api_key():
    with pytest.raises(ClockifyError):
        ClockifyClient("")


def test_sets_api_key_header():
    session = FakeSession({})
    ClockifyClient("secret", session=session)

    assert session.headers["X-Api-Key"] == "secret"


def test_fetch_month_uses_active_workspace():
    session = FakeSession(
        {
            "/user": FakeResponse(USER),
            "/workspaces/w1/user/u1/time-entries": FakeResponse([ENTRY]),
        }
    )

    entries = ClockifyClient("k", session=session).fetch_month(date(2026, 1, 20))

    assert [entry.id for entry in entries] == ["e1"]
    assert entries[0].hours == 1.0
    _, params = session.calls[-1]
    assert params == {
        "start": "2026-01-01T00:00:00.000Z",
        "end": "2026-01-31T23:59:59.999Z",
        "page-size": 5000,
    }


def test_invalid_key_raises():
    session = FakeSession({"/user": FakeResponse({"message": "nope"}, status_code=401)})

    with pytest.raises(ClockifyError, match="Nieprawidłowy klucz API Clockify"):
        ClockifyClient("bad", session=session).get_user()


def test_entries_error_raises():
    session = FakeSession({"/workspaces/w1/user/u1/time-entries": FakeResponse({}, status_code=500)})

    with pytest.raises(ClockifyError, match="Błąd pobierania wpisów czasu"):
        ClockifyClient("k", session=session).get_time_entries("w1", "u1", date(2026, 1, 1))


def test_network_errors_are_wrapped():
    session = FakeSession({"/user": requests.ConnectionError("offline")})

    with pytest.raises(ClockifyError) as info:
        ClockifyClient("k", session=session).get_user()
    assert isinstance(info.value.__cause__, requests.ConnectionError)


def test_get_projects():
    session = FakeSession({"/workspaces/w1/projects": FakeResponse([{"id": "p1", "name": "ICT"}])})

    projects = ClockifyClient("k", session=session).get_projects("w1")

    assert [(project.id, project.name) for project in projects] == [("p1", "ICT")]


def test_month_range_february():
    start, end = month_range(date(2026, 2, 10))

    assert start.isoformat() == "2026-02-01T00:00:00+00:00"
    assert end.date() == date(2026, 2, 28)


def test_month_range_uses_local_month_edges():
    warsaw = timezone(timedelta(hours=1))

    start, end = month_range(date(2026, 1, 15), warsaw)

    assert start.isoformat() == "2025-12-31T23:00:00+00:00"
    assert end.isoformat() == "2026-01-31T22:59:59.999000+00:00"


def test_fetch_month_sends_local_window_and_keeps_workspace():
    session = FakeSession(
        {
            "/user": FakeResponse(USER),
            "/workspaces/w1/user/u1/time-entries": FakeResponse([]),
        }
    )
    client = ClockifyClient("k", session=session)

    client.fetch_month(date(2026, 1, 1), timezone(timedelta(hours=1)))

    _, params = session.calls[-1]
    assert params["start"] == "2025-12-31T23:00:00.000Z"
    assert params["end"] == "2026-01-31T22:59:59.999Z"
    assert client.workspace_id == "w1"


def test_fetch_month_falls_back_to_default_workspace():
    session = FakeSession(
        {
            "/user": FakeResponse({"id": "u1", "activeWorkspace": None, "defaultWorkspace": "w0"}),
            "/workspaces/w0/user/u1/time-entries": FakeResponse([ENTRY]),
        }
    )
    client = ClockifyClient("k", session=session)

    assert len(client.fetch_month(date(2026, 1, 1))) == 1
    assert client.workspace_id == "w0"
