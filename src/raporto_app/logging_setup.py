"""Logging configuration for the entry points."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # requests/urllib3 are chatty on DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
