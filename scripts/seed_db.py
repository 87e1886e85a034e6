from __future__ import annotations

import argparse
import importlib
from pathlib import Path

from dotenv import load_dotenv

from cafe_backoffice.config import get_settings_module
from cafe_backoffice.database.bootstrap import apply_sql_file, ensure_super_admin


def main() -> None:
    parser = argparse.ArgumentParser(description="Load demo data and create the bootstrap Super Admin.")
    parser.add_argument("--admin-email", default=None)
    parser.add_argument("--admin-password", default=None)
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    seed_path = Path(__file__).resolve().parents[1] / "database" / "seed.sql"
    apply_sql_file(db_config, path=seed_path)

    email = args.admin_email or settings.BOOTSTRAP_ADMIN_EMAIL
    password = args.admin_password or settings.BOOTSTRAP_ADMIN_PASSWORD
    if email and password:
        ensure_super_admin(db_config, name="Super Admin", email=email, password=password)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
