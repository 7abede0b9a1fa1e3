from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import GlobalAttendanceSettings
from .repository import SettingsRepository

# Single-row table
_SETTINGS_ID = 1


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self) -> Optional[GlobalAttendanceSettings]:
        with db_cursor(self._conn_factory, operation="get", target="settings/global") as (_, cur):
            cur.execute(
                """
                SELECT check_in_time, check_out_time, grace_period_minutes, token_rotation_seconds
                FROM attendance_settings
                WHERE settings_id=%s
                """,
                (_SETTINGS_ID,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return GlobalAttendanceSettings(
                check_in_time=normalize_mysql_time(r["check_in_time"]),
                check_out_time=normalize_mysql_time(r["check_out_time"]),
                grace_period_minutes=int(r.get("grace_period_minutes") or 0),
                token_rotation_seconds=int(r["token_rotation_seconds"]),
            )

    def save(self, settings: GlobalAttendanceSettings) -> None:
        with db_cursor(self._conn_factory, operation="update", target="settings/global") as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_settings(settings_id, check_in_time, check_out_time,
                                                grace_period_minutes, token_rotation_seconds)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    check_in_time=VALUES(check_in_time),
                    check_out_time=VALUES(check_out_time),
                    grace_period_minutes=VALUES(grace_period_minutes),
                    token_rotation_seconds=VALUES(token_rotation_seconds)
                """,
                (
                    _SETTINGS_ID,
                    settings.check_in_time,
                    settings.check_out_time,
                    int(settings.grace_period_minutes),
                    int(settings.token_rotation_seconds),
                ),
            )
