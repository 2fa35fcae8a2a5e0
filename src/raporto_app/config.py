"""Configuration helpers for the Raporto application."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional


logger = logging.getLogger(__name__)

APP_DIR = Path.home() / ".raporto_app"
CONFIG_FILE = APP_DIR / "config.json"
CONFIG_ENV = "RAPORTO_CONFIG"

# Fields that may legitimately be null; all others must be strings
NULLABLE_FIELDS = {"selected_project_id", "last_export_dir"}


def config_path() -> Path:
    """Location of the settings file; ``RAPORTO_CONFIG`` overrides the default."""

    override = os.environ.get(CONFIG_ENV)
    return Path(override) if override else CONFIG_FILE


def _valid_value(key: str, value: object) -> bool:
    if isinstance(value, str) or (value is None and key in NULLABLE_FIELDS):
        return True
    logger.warning("Ignoring config value %s=%r, using the default", key, value)
    return False


@dataclass
class AppConfig:
    """Persisted configuration."""

    clockify_api_key: str = ""
    contractor_name: str = ""
    supervisor_name: str = "PTE"
    selected_project_id: Optional[str] = None
    contract_date: str = "5.01.2026"
    last_export_dir: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return bool(self.clockify_api_key.strip())

    @classmethod
    def load(cls) -> "AppConfig":
        """Load configuration from disk, returning defaults when missing."""

        path = config_path()
        if path.exists():
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
                if isinstance(data, dict):
                    allowed = {item.name for item in fields(cls)}
                    filtered = {
                        key: value
                        for key, value in data.items()
                        if key in allowed and _valid_value(key, value)
                    }
                    return cls(**filtered)
                return cls()
            except (json.JSONDecodeError, TypeError, ValueError) as exc:
                # Fall back to defaults if the file is corrupted.
                logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return cls()

    def save(self) -> None:
        """Persist configuration to disk."""

        path = config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(asdict(self), ensure_ascii=False, indent=2), encoding="utf-8")
        logger.debug("Saved config to %s", path)
