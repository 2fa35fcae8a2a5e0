"""Minimal Clockify REST client (user lookup, projects, monthly time entries)."""

from __future__ import annotations

import calendar
import logging
from datetime import date, datetime, time, timezone, tzinfo
from typing import Any, List, Optional

import requests

from .models import Project, TimeEntry


logger = logging.getLogger(__name__)

API_BASE = "https://api.clockify.me/api/v1"
PAGE_SIZE = 5000
TIMEOUT = 30


class ClockifyError(RuntimeError):
    """Request to the Clockify API failed."""


def month_range(month: date, tz: Optional[tzinfo] = None) -> tuple[datetime, datetime]:
    """Start and end instants, in UTC, of the month containing ``month``.

    The month edges are midnights in ``tz`` (UTC when not given), the same
    zone the entries are later grouped in.
    """

    zone = tz or timezone.utc
    last_day = calendar.monthrange(month.year, month.month)[1]
    start = datetime.combine(month.replace(day=1), time.min, tzinfo=zone)
    end = datetime.combine(month.replace(day=last_day), time(23, 59, 59, 999000), tzinfo=zone)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def _iso(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


class ClockifyClient:
    """Wrapper around the endpoints the report needs."""

    def __init__(self, api_key: str, session: Optional[requests.Session] = None) -> None:
        if not api_key:
            raise ClockifyError("Wprowadź klucz API Clockify w ustawieniach.")
        self.session = session or requests.Session()
        self.workspace_id: Optional[str] = None
        self.session.headers.update({"X-Api-Key": api_key})

    def _get(self, path: str, error_message: str, params: Optional[dict] = None) -> Any:
        url = f"{API_BASE}{path}"
        try:
            response = self.session.get(url, params=params, timeout=TIMEOUT)
        except requests.RequestException as exc:
            logger.error("GET %s failed: %s", url, exc)
            raise ClockifyError(error_message) from exc
        if not response.ok:
            logger.error("GET %s returned %s: %s", url, response.status_code, response.text[:200])
            raise ClockifyError(error_message)
        return response.json()

    def get_user(self) -> dict:
        """Current user; also validates the API key."""

        return self._get("/user", "Nieprawidłowy klucz API Clockify")

    def get_projects(self, workspace_id: str) -> List[Project]:
        data = self._get(
            f"/workspaces/{workspace_id}/projects",
            "Błąd pobierania projektów",
            params={"page-size": PAGE_SIZE},
        )
        return [Project.from_api(item) for item in data]

    def get_time_entries(
        self, workspace_id: str, user_id: str, month: date, tz: Optional[tzinfo] = None
    ) -> List[TimeEntry]:
        """All entries of the user within the month containing ``month``."""

        start, end = month_range(month, tz)
        data = self._get(
            f"/workspaces/{workspace_id}/user/{user_id}/time-entries",
            "Błąd pobierania wpisów czasu",
            params={"start": _iso(start), "end": _iso(end), "page-size": PAGE_SIZE},
        )
        entries = [TimeEntry.from_api(item) for item in data]
        logger.info("Fetched %d time entries for %02d/%d", len(entries), month.month, month.year)
        return entries

    def fetch_month(self, month: Optional[date] = None, tz: Optional[tzinfo] = None) -> List[TimeEntry]:
        """Look up the user and return their entries for ``month`` (default: current).

        The workspace used is kept in ``workspace_id`` for follow-up calls.
        """

        user = self.get_user()
        self.workspace_id = user.get("activeWorkspace") or user.get("defaultWorkspace")
        return self.get_time_entries(self.workspace_id, user["id"], month or date.today(), tz)
