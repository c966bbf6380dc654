from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceEntry, AttendanceHistoryRow, AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "ar.attendance_id, ar.admin_id, ar.employee_id, ar.work_date, ar.status, ar.remarks, ar.created_at, ar.updated_at"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        admin_id=r["admin_id"],
        employee_id=r["employee_id"],
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        remarks=r.get("remarks") or "",
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert_many(self, *, admin_id: str, work_date: date, entries: Sequence[AttendanceEntry]) -> List[AttendanceRecord]:
        if not entries:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO attendance_records(admin_id, employee_id, work_date, status, remarks)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status), remarks=VALUES(remarks)
                """,
                [(admin_id, e.employee_id, work_date, e.status.value, e.remarks) for e in entries],
            )

            ids = [e.employee_id for e in entries]
            placeholders = ",".join(["%s"] * len(ids))
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records ar
                WHERE ar.work_date=%s AND ar.employee_id IN ({placeholders})
                """,
                tuple([work_date] + ids),
            )
            by_employee = {r["employee_id"]: _to_record(r) for r in fetchall(cur)}
            return [by_employee[i] for i in ids if i in by_employee]

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records ar WHERE ar.attendance_id=%s",
                (int(attendance_id),),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_admin_on(self, admin_id: str, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records ar
                WHERE ar.admin_id=%s AND ar.work_date=%s
                """,
                (admin_id, work_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def update(self, attendance_id: int, *, status: AttendanceStatus, remarks: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET status=%s, remarks=%s
                WHERE attendance_id=%s
                """,
                (status.value, remarks, int(attendance_id)),
            )
            return cur.rowcount > 0

    def history_rows(
        self,
        *,
        admin_id: Optional[str] = None,
        employee_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> Sequence[AttendanceHistoryRow]:
        clauses = ["1=1"]
        params: list[object] = []

        if admin_id is not None:
            clauses.append("ar.admin_id=%s")
            params.append(admin_id)
        if employee_id is not None:
            clauses.append("ar.employee_id=%s")
            params.append(employee_id)
        if start_date is not None:
            clauses.append("ar.work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("ar.work_date <= %s")
            params.append(end_date)

        where = " AND ".join(clauses)
        limit_sql = ""
        if limit is not None:
            limit_sql = "LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, e.employee_code, e.full_name, e.department
                FROM attendance_records ar
                LEFT JOIN employees e ON e.employee_id = ar.employee_id
                WHERE {where}
                ORDER BY ar.work_date DESC, e.employee_code ASC
                {limit_sql}
                """,
                tuple(params),
            )
            return [
                AttendanceHistoryRow(
                    record=_to_record(r),
                    employee_code=r.get("employee_code"),
                    full_name=r.get("full_name"),
                    department=r.get("department"),
                )
                for r in fetchall(cur)
            ]
