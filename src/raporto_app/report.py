"""Grouping of time entries into daily report rows and the editable report state.

Contains:
- ``build_daily_report`` which turns raw entries into one row per day;
- ``report_month`` which picks the month a set of entries belongs to;
- ``ReportState`` which holds the rows while the user edits them.
"""

from __future__ import annotations

import logging
from datetime import date, tzinfo
from typing import Dict, Iterable, List, Optional

from .durations import round_hours
from .models import DailyReportItem, TimeEntry


logger = logging.getLogger(__name__)


def build_daily_report(
    entries: Iterable[TimeEntry],
    project_id: Optional[str] = None,
    tz: Optional[tzinfo] = None,
    month: Optional[date] = None,
) -> List[DailyReportItem]:
    """Group entries by start date, joining descriptions and summing hours.

    With ``project_id`` set only entries of that project are counted; with
    ``month`` set days falling outside that month are dropped.
    Empty descriptions are skipped but their time still counts.
    """

    grouped: Dict[date, DailyReportItem] = {}
    skipped = 0
    for entry in entries:
        if project_id and entry.project_id != project_id:
            skipped += 1
            continue
        if not entry.start:
            logger.warning("Time entry %s has no start timestamp, skipping", entry.id)
            continue

        day = entry.start_date(tz)
        if month is not None and (day.year, day.month) != (month.year, month.month):
            logger.debug("Entry %s falls on %s, outside the reported month", entry.id, day)
            continue
        item = grouped.get(day)
        if item is None:
            item = grouped[day] = DailyReportItem(date=day)

        if entry.description:
            item.raw_descriptions.append(entry.description)
        item.total_hours += entry.hours

    if skipped:
        logger.debug("Skipped %d entries outside project %s", skipped, project_id)

    items = [grouped[day] for day in sorted(grouped)]
    for item in items:
        item.final_description = item.default_description()
    return items


def report_month(
    entries: List[TimeEntry], today: Optional[date] = None, tz: Optional[tzinfo] = None
) -> date:
    """First day of the reported month: that of the first entry, else of ``today``."""

    for entry in entries:
        if entry.start:
            day = entry.start_date(tz)
            return day.replace(day=1)
    return (today or date.today()).replace(day=1)


class ReportState:
    """Ordered daily rows that the user may edit before exporting."""

    def __init__(self, items: Optional[List[DailyReportItem]] = None) -> None:
        self.items: List[DailyReportItem] = list(items or [])

    def load(
        self,
        entries: Iterable[TimeEntry],
        project_id: Optional[str] = None,
        tz: Optional[tzinfo] = None,
        month: Optional[date] = None,
    ) -> None:
        """Replace all rows with a fresh aggregation of ``entries``."""

        self.items = build_daily_report(entries, project_id=project_id, tz=tz, month=month)
        logger.info("Report holds %d days, %.2f hours", len(self.items), self.total_hours)

    def set_description(self, index: int, text: str) -> None:
        """Overwrite the description of one day."""

        if not 0 <= index < len(self.items):
            raise IndexError(f"No report row at index {index}")
        self.items[index].final_description = text

    def reset_description(self, index: int) -> None:
        if not 0 <= index < len(self.items):
            raise IndexError(f"No report row at index {index}")
        item = self.items[index]
        item.final_description = item.default_description()

    @property
    def total_hours(self) -> float:
        return sum(item.total_hours for item in self.items)

    @property
    def rounded_total(self) -> int:
        return round_hours(self.total_hours)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def __len__(self) -> int:
        return len(self.items)
