from pathlib import Path
import sys

import pytest


ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path):
    monkeypatch.setenv("RAPORTO_CONFIG", str(tmp_path / "config.json"))
    yield


@pytest.fixture
def make_entry():
    from raporto_app.models import TimeEntry

    counter = iter(range(1, 10_000))

    def _make(start, duration="PT1H", description="", project_id=None, end=None):
        return TimeEntry(
            id=f"e{next(counter)}",
            start=start,
            description=description,
            end=end,
            duration=duration,
            project_id=project_id,
        )

    return _make
