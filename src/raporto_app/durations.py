"""Parsing of ISO-8601 durations as returned by Clockify (``PT1H30M``)."""

from __future__ import annotations

import logging
import math
import re
from typing import Optional


logger = logging.getLogger(__name__)

_DURATION_RE = re.compile(
    r"^P(?:(?P<days>\d+)D)?"
    r"(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+(?:\.\d+)?)S)?)?$"
)


def parse_duration(text: Optional[str]) -> float:
    """Convert a duration string into fractional hours.

    Empty values (running timers) count as zero, and so does text that is not
    a duration at all.
    """

    if not text:
        return 0.0

    match = _DURATION_RE.match(text.strip().upper())
    if match is None or text.strip().upper() in {"P", "PT"}:
        logger.warning("Unrecognised duration %r, counting as 0 hours", text)
        return 0.0

    days = int(match.group("days") or 0)
    hours = int(match.group("hours") or 0)
    minutes = int(match.group("minutes") or 0)
    seconds = float(match.group("seconds") or 0)
    return days * 24 + hours + minutes / 60 + seconds / 3600


def round_hours(value: float) -> int:
    """Round half up (2.5 -> 3), the way hours are shown on the reports."""

    return int(math.floor(value + 0.5))
