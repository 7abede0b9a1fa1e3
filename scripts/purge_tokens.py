from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from qr_attendance.config import get_settings_module
from qr_attendance.container import build_container


def main() -> None:
    """Delete attendance tokens issued before today. Safe to run from cron."""
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(db_config=dict(settings.DB_CONFIG))
    deleted = container.token_maintenance.purge_stale()
    print(f"OK: purged {deleted} stale attendance tokens")


if __name__ == "__main__":
    main()
