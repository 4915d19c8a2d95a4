"""Back up the database to backups/ as JSON (restorable) or SQL.

Note: The SQL file is this application's own INSERT dump, readable by its
importer. For a full server dump use `mysqldump` instead.
"""

from __future__ import annotations

import argparse
import importlib
import json
from datetime import datetime
from pathlib import Path

from attendance_tracker.config import get_settings_module
from attendance_tracker.container import build_container


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--format", choices=("json", "sql"), default="json")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=dict(settings.DB_CONFIG))

    out_dir = Path(__file__).resolve().parents[1] / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"attendance_db_{ts}.{args.format}"

    if args.format == "sql":
        out_file.write_text(container.backup_service.export_sql(), encoding="utf-8")
    else:
        out_file.write_text(json.dumps(container.backup_service.export_json(), indent=2), encoding="utf-8")
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
