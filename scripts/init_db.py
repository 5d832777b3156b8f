"""Create the attendance database and tables for the configured environment.

Usage: python scripts/init_db.py [development|testing|production]
"""

from __future__ import annotations

import importlib
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.store_attendance.store_attendance.database.bootstrap import apply_schema, list_tables


def main(argv: list[str]) -> int:
    if argv:
        os.environ["APP_ENV"] = argv[0]

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"

    apply_schema(db_config)
    tables = sorted(list_tables(db_config))

    missing = {"users", "stores", "user_stores", "attendance"} - set(tables)
    if missing:
        print(f"FAILED: {target} is missing tables: {', '.join(sorted(missing))}")
        return 1

    print(f"OK: {target} tables={', '.join(tables)}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
