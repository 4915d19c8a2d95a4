"""Create the demo admin account and load the sample employees/attendance."""

from __future__ import annotations

import argparse
import importlib

from attendance_tracker.config import get_settings_module
from attendance_tracker.container import build_container
from attendance_tracker.database.bootstrap import ensure_admin_user


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", type=int, default=None, help="random seed for reproducible sample data")
    parser.add_argument("--no-sample-data", action="store_true", help="only create the admin account")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    ensure_admin_user(db_config)
    if not args.no_sample_data:
        container = build_container(db_config=db_config)
        result = container.backup_service.generate_sample_data(seed=args.seed)
        if not result.success:
            raise SystemExit(result.message)
        print(result.message)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
