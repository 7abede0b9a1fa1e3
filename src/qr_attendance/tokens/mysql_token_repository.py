from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import AttendanceToken
from .repository import TokenRepository


class MySQLTokenRepository(TokenRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, token_id: str) -> Optional[AttendanceToken]:
        with db_cursor(self._conn_factory, operation="get", target=f"attendance_tokens/{token_id}") as (_, cur):
            cur.execute(
                """
                SELECT token_id, issued_at, secret, valid_until
                FROM attendance_tokens
                WHERE token_id=%s
                """,
                (token_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return AttendanceToken(
                token_id=r["token_id"],
                issued_at=r["issued_at"],
                secret=r["secret"],
                valid_until=r["valid_until"],
            )

    def create(self, token: AttendanceToken) -> str:
        with db_cursor(self._conn_factory, operation="create", target=f"attendance_tokens/{token.token_id}") as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_tokens(token_id, issued_at, secret, valid_until)
                VALUES(%s,%s,%s,%s)
                """,
                (token.token_id, token.issued_at, token.secret, token.valid_until),
            )
            return token.token_id

    def delete_issued_before(self, moment: datetime) -> int:
        with db_cursor(self._conn_factory, operation="delete", target="attendance_tokens") as (_, cur):
            cur.execute("DELETE FROM attendance_tokens WHERE issued_at < %s", (moment,))
            return int(cur.rowcount)
