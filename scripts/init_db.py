from __future__ import annotations

import importlib

from attendance_tracker.config import get_settings_module
from attendance_tracker.database.bootstrap import apply_procedures, apply_schema, list_tables


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config)
    apply_procedures(db_config)
    tables = list_tables(db_config)
    print(
        "OK: Applied schema.sql + procedures.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
