from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        employee_id=str(r["employee_id"]),
        work_date=r["work_date"],
        check_in_time=r["check_in_time"],
        check_out_time=r.get("check_out_time"),
        delay_minutes=int(r.get("delay_minutes") or 0),
        total_work_hours=float(r.get("total_work_hours") or 0),
    )


def _to_report_row(r: Dict[str, Any]) -> AttendanceReportRow:
    return AttendanceReportRow(
        employee_id=str(r["employee_id"]),
        full_name=r["full_name"],
        login_id=r["login_id"],
        work_date=r["work_date"],
        check_in_time=r["check_in_time"],
        check_out_time=r.get("check_out_time"),
        delay_minutes=int(r.get("delay_minutes") or 0),
        total_work_hours=float(r.get("total_work_hours") or 0),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        target = f"attendance_records?employee_id={employee_id}&date={work_date.isoformat()}"
        with db_cursor(self._conn_factory, operation="query", target=target) as (_, cur):
            cur.execute(
                """
                SELECT record_id, employee_id, work_date, check_in_time, check_out_time,
                       delay_minutes, total_work_hours
                FROM attendance_records
                WHERE employee_id=%s AND work_date=%s
                """,
                (employee_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_recent_for_employee(self, employee_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory, operation="query", target=f"attendance_records?employee_id={employee_id}") as (_, cur):
            cur.execute(
                """
                SELECT record_id, employee_id, work_date, check_in_time, check_out_time,
                       delay_minutes, total_work_hours
                FROM attendance_records
                WHERE employee_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (employee_id, int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create_checkin(
        self,
        *,
        employee_id: str,
        work_date: date,
        check_in_time: datetime,
        delay_minutes: int,
    ) -> Optional[int]:
        target = f"attendance_records?employee_id={employee_id}&date={work_date.isoformat()}"
        with db_cursor(self._conn_factory, operation="create", target=target) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO attendance_records(employee_id, work_date, check_in_time,
                                                   check_out_time, delay_minutes, total_work_hours)
                    VALUES(%s,%s,%s,NULL,%s,0)
                    """,
                    (employee_id, work_date, check_in_time, int(delay_minutes)),
                )
            except mysql.connector.IntegrityError as e:
                if not is_duplicate_key(e):
                    raise
                logger.warning("check-in for %s on %s lost to a concurrent create", employee_id, work_date)
                return None
            return int(cur.lastrowid)

    def close_checkout(
        self,
        *,
        record_id: int,
        check_out_time: datetime,
        total_work_hours: float,
    ) -> bool:
        with db_cursor(self._conn_factory, operation="update", target=f"attendance_records/{record_id}") as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, total_work_hours=%s
                WHERE record_id=%s AND check_out_time IS NULL
                """,
                (check_out_time, float(total_work_hours), int(record_id)),
            )
            return cur.rowcount > 0

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses = ["ar.work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if employee_id is not None:
            clauses.append("ar.employee_id=%s")
            params.append(employee_id)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory, operation="query", target="attendance_records") as (_, cur):
            cur.execute(
                f"""
                SELECT
                    ar.employee_id, e.full_name, e.login_id,
                    ar.work_date, ar.check_in_time, ar.check_out_time,
                    ar.delay_minutes, ar.total_work_hours
                FROM attendance_records ar
                JOIN employees e ON e.employee_id = ar.employee_id
                WHERE {where}
                ORDER BY ar.work_date DESC, e.full_name ASC
                """,
                tuple(params),
            )
            return [_to_report_row(r) for r in fetchall(cur)]

    def get_log_page(self, *, limit: int, offset: int) -> Sequence[AttendanceReportRow]:
        with db_cursor(self._conn_factory, operation="query", target=f"attendance_records?offset={offset}") as (_, cur):
            cur.execute(
                """
                SELECT
                    ar.employee_id, e.full_name, e.login_id,
                    ar.work_date, ar.check_in_time, ar.check_out_time,
                    ar.delay_minutes, ar.total_work_hours
                FROM attendance_records ar
                JOIN employees e ON e.employee_id = ar.employee_id
                ORDER BY ar.check_in_time DESC
                LIMIT %s OFFSET %s
                """,
                (int(limit), int(offset)),
            )
            return [_to_report_row(r) for r in fetchall(cur)]
