"""Back up the active namespace to BACKUP_DIR/backup_<yyyy-MM-dd>.json.

Usage: python scripts/backup.py [--restore]
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from dotenv import load_dotenv

from config import get_settings_module

from shopclock.container import build_container
from shopclock.core.logging import setup_logging


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--restore", action="store_true", help="restore the newest backup instead")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(settings)
    container.session_service.restore()

    if args.restore:
        outcome = container.backup_service.restore_latest()
    else:
        outcome = container.backup_service.backup()

    print(("OK: " if outcome.ok else "FAILED: ") + outcome.message)
    if not outcome.ok:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
