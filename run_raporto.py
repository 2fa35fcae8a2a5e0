"""Helper entry point to launch Raporto without installation.

The project uses a ``src`` layout, so the ``raporto_app`` package is located
under the ``src`` directory.  Running ``python -m raporto_app`` from the
repository root will therefore fail unless that directory is added to
``PYTHONPATH``.  This wrapper configures the path and then delegates to the
command line entry point (no arguments opens the window).
"""

from __future__ import annotations

from pathlib import Path
import sys


def _ensure_src_on_path() -> None:
    project_root = Path(__file__).resolve().parent
    src_dir = project_root / "src"
    src_dir_str = str(src_dir)
    if src_dir.is_dir() and src_dir_str not in sys.path:
        sys.path.insert(0, src_dir_str)


def main() -> int:
    _ensure_src_on_path()

    from raporto_app.cli import main as cli_main

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
