from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import InternalError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveHistoryRow, LeaveRequest
from .repository import LeaveRepository

_COLUMNS = (
    "lr.leave_id, lr.admin_id, lr.employee_id, lr.leave_type, lr.start_date, lr.end_date, "
    "lr.reason, lr.status, lr.rejection_reason, lr.created_at, lr.updated_at"
)


def _to_request(r: dict) -> LeaveRequest:
    return LeaveRequest(
        leave_id=int(r["leave_id"]),
        admin_id=r["admin_id"],
        employee_id=r["employee_id"],
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        rejection_reason=r.get("rejection_reason"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        admin_id: str,
        employee_id: str,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> LeaveRequest:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(admin_id, employee_id, leave_type, start_date, end_date, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (admin_id, employee_id, leave_type.value, start_date, end_date, reason, LeaveStatus.PENDING.value),
            )
            leave_id = int(cur.lastrowid)

        created = self.get_by_id(leave_id)
        if created is None:
            raise InternalError("Something went wrong while applying for leave")
        return created

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests lr WHERE lr.leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def decide(self, leave_id: int, *, status: LeaveStatus, rejection_reason: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, rejection_reason=%s
                WHERE leave_id=%s AND status=%s
                """,
                (status.value, rejection_reason, int(leave_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def delete(self, leave_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM leave_requests WHERE leave_id=%s", (int(leave_id),))
            return cur.rowcount > 0

    def history_rows(
        self,
        *,
        admin_id: Optional[str] = None,
        employee_id: Optional[str] = None,
        status: Optional[LeaveStatus] = None,
        limit: Optional[int] = None,
    ) -> Sequence[LeaveHistoryRow]:
        clauses = ["1=1"]
        params: list[object] = []

        if admin_id is not None:
            clauses.append("lr.admin_id=%s")
            params.append(admin_id)
        if employee_id is not None:
            clauses.append("lr.employee_id=%s")
            params.append(employee_id)
        if status is not None:
            clauses.append("lr.status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)
        limit_sql = ""
        if limit is not None:
            limit_sql = "LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, e.employee_code, e.full_name
                FROM leave_requests lr
                LEFT JOIN employees e ON e.employee_id = lr.employee_id
                WHERE {where}
                ORDER BY lr.created_at DESC, lr.leave_id DESC
                {limit_sql}
                """,
                tuple(params),
            )
            return [
                LeaveHistoryRow(
                    request=_to_request(r),
                    employee_code=r.get("employee_code"),
                    full_name=r.get("full_name"),
                )
                for r in fetchall(cur)
            ]
