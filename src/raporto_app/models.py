"""Data classes shared by the Clockify client, the aggregator and the exporters."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import Any, Mapping, Optional

from dateutil import parser

from .durations import parse_duration, round_hours


@dataclass
class TimeEntry:
    """A single Clockify time entry."""

    id: str
    start: str
    description: str = ""
    end: Optional[str] = None
    duration: Optional[str] = None
    project_id: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "TimeEntry":
        """Build an entry from the JSON object returned by the API."""

        interval = payload.get("timeInterval") or {}
        return cls(
            id=str(payload.get("id", "")),
            start=interval.get("start") or "",
            description=payload.get("description") or "",
            end=interval.get("end"),
            duration=interval.get("duration"),
            project_id=payload.get("projectId"),
        )

    @property
    def hours(self) -> float:
        """Duration in hours, derived from start/end when the API sent none."""

        if self.duration:
            return parse_duration(self.duration)
        if self.start and self.end:
            elapsed = parser.isoparse(self.end) - parser.isoparse(self.start)
            return max(elapsed.total_seconds(), 0.0) / 3600
        return 0.0

    def start_date(self, tz: Optional[tzinfo] = None) -> date:
        """Calendar day of the start timestamp.

        Without ``tz`` this is the date as written in the timestamp.
        """

        if tz is None:
            return date.fromisoformat(self.start.split("T", 1)[0])
        started: datetime = parser.isoparse(self.start)
        return started.astimezone(tz).date()


@dataclass
class DailyReportItem:
    """One day of the report: editable description and summed hours."""

    date: date
    raw_descriptions: list[str] = field(default_factory=list)
    final_description: str = ""
    total_hours: float = 0.0

    @property
    def rounded_hours(self) -> int:
        return round_hours(self.total_hours)

    def default_description(self) -> str:
        return ", ".join(self.raw_descriptions)


@dataclass
class Project:
    """Clockify project, used for the optional project filter."""

    id: str
    name: str
    client_id: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "Project":
        return cls(
            id=str(payload.get("id", "")),
            name=payload.get("name") or "",
            client_id=payload.get("clientId"),
        )
