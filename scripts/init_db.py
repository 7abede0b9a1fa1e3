from __future__ import annotations

import argparse
import importlib
import os

from dotenv import load_dotenv

from qr_attendance.config import get_settings_module
from qr_attendance.database.bootstrap import apply_schema, ensure_admin, list_tables
from qr_attendance.database.connection import DBConfig


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the attendance schema and the first admin account.")
    parser.add_argument("--admin-login", default=os.getenv("ADMIN_LOGIN", "admin"))
    parser.add_argument("--admin-password", default=os.getenv("ADMIN_PASSWORD"))
    parser.add_argument("--admin-name", default=os.getenv("ADMIN_NAME", "Administrator"))
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_dict(dict(settings.DB_CONFIG))

    apply_schema(config)
    tables = list_tables(config)
    print(
        "OK: Applied schema.sql -> "
        f"{config.user}@{config.host}:{config.port}/{config.database} "
        f"(tables={len(tables)})"
    )

    if args.admin_password:
        employee_id = ensure_admin(
            config,
            login_id=args.admin_login,
            password=args.admin_password,
            full_name=args.admin_name,
        )
        print(f"OK: admin '{args.admin_login}' ready (employee_id={employee_id})")
    else:
        print("Skipped admin account (pass --admin-password or set ADMIN_PASSWORD)")


if __name__ == "__main__":
    main()
