from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..core.enums import EmployeeStatus, EmployeeType
from ..core.exceptions import InternalError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Employee, ShiftDetail
from .repository import UPDATABLE_FIELDS, EmployeeRepository

_COLUMNS = (
    "employee_id, employee_code, admin_id, full_name, email, phone, designation, department, "
    "joining_date, employee_type, status, password_hash, created_at"
)

_SHIFT_COLUMNS = "employee_id, shift_number, shift_date, start_time, end_time"


def _to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=row["employee_id"],
        employee_code=row["employee_code"],
        admin_id=row["admin_id"],
        full_name=row["full_name"],
        email=row["email"],
        phone=row["phone"],
        designation=row["designation"],
        department=row.get("department"),
        joining_date=row["joining_date"],
        employee_type=EmployeeType(row["employee_type"]),
        status=EmployeeStatus(row["status"]),
        password_hash=row["password_hash"],
        created_at=row.get("created_at"),
    )


def _to_shift(row: dict) -> ShiftDetail:
    return ShiftDetail(
        shift_number=int(row["shift_number"]),
        shift_date=row["shift_date"],
        start_time=row["start_time"],
        end_time=row["end_time"],
    )


def _load_shifts(cur, employee_ids: Sequence[str]) -> Dict[str, Tuple[ShiftDetail, ...]]:
    if not employee_ids:
        return {}
    placeholders = ",".join(["%s"] * len(employee_ids))
    cur.execute(
        f"""
        SELECT {_SHIFT_COLUMNS}
        FROM employee_shifts
        WHERE employee_id IN ({placeholders})
        ORDER BY shift_date ASC, shift_number ASC
        """,
        tuple(employee_ids),
    )
    grouped: Dict[str, List[ShiftDetail]] = {}
    for r in fetchall(cur):
        grouped.setdefault(r["employee_id"], []).append(_to_shift(r))
    return {k: tuple(v) for k, v in grouped.items()}


def _insert_shifts(cur, employee_id: str, shifts: Sequence[ShiftDetail]) -> None:
    if not shifts:
        return
    cur.executemany(
        """
        INSERT INTO employee_shifts(employee_id, shift_number, shift_date, start_time, end_time)
        VALUES(%s,%s,%s,%s,%s)
        """,
        [(employee_id, s.shift_number, s.shift_date, s.start_time, s.end_time) for s in shifts],
    )


def _with_shifts(cur, rows: List[dict]) -> List[Employee]:
    employees = [_to_employee(r) for r in rows]
    shifts = _load_shifts(cur, [e.employee_id for e in employees])
    return [replace(e, shifts=shifts.get(e.employee_id, ())) for e in employees]


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, column: str, value: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE {column}=%s", (value,))
            rows = fetchall(cur)
            if not rows:
                return None
            return _with_shifts(cur, rows[:1])[0]

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self._get_one("employee_id", employee_id)

    def get_by_email(self, email: str) -> Optional[Employee]:
        return self._get_one("email", email)

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        return self._get_one("employee_code", employee_code)

    def create(
        self,
        *,
        employee_id: str,
        employee_code: str,
        admin_id: str,
        full_name: str,
        email: str,
        phone: str,
        designation: str,
        department: Optional[str],
        joining_date: date,
        employee_type: EmployeeType,
        password_hash: str,
        shifts: Sequence[ShiftDetail] = (),
    ) -> Employee:
        with db_cursor(self._conn_factory, conflict_message="Employee with this ID or Email already exists") as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(
                    employee_id, employee_code, admin_id, full_name, email, phone,
                    designation, department, joining_date, employee_type, status, password_hash
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    employee_id,
                    employee_code,
                    admin_id,
                    full_name,
                    email,
                    phone,
                    designation,
                    department,
                    joining_date,
                    employee_type.value,
                    EmployeeStatus.ACTIVE.value,
                    password_hash,
                ),
            )
            _insert_shifts(cur, employee_id, shifts)
        created = self.get_by_id(employee_id)
        if not created:
            raise InternalError("Something went wrong while registering the employee")
        return created

    def list_for_admin(self, admin_id: str, *, status: Optional[EmployeeStatus] = None) -> Sequence[Employee]:
        clauses = ["admin_id=%s"]
        params: list[object] = [admin_id]
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE {where}
                ORDER BY employee_code ASC
                """,
                tuple(params),
            )
            return _with_shifts(cur, fetchall(cur))

    def list_ids_for_admin(self, admin_id: str, *, active_only: bool = True) -> Set[str]:
        sql = "SELECT employee_id FROM employees WHERE admin_id=%s"
        params: tuple = (admin_id,)
        if active_only:
            sql += " AND status=%s"
            params = (admin_id, EmployeeStatus.ACTIVE.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return {r["employee_id"] for r in fetchall(cur)}

    def update(self, employee_id: str, changes: dict) -> bool:
        fields = [k for k in changes if k in UPDATABLE_FIELDS]
        if not fields:
            return False

        params: list[object] = []
        for k in fields:
            v = changes[k]
            params.append(v.value if isinstance(v, EmployeeType) else v)

        with db_cursor(self._conn_factory, conflict_message="Employee with this Email already exists") as (_, cur):
            cur.execute(
                f"UPDATE employees SET {', '.join(f'{k}=%s' for k in fields)} WHERE employee_id=%s",
                tuple(params + [employee_id]),
            )
            return cur.rowcount > 0

    def set_status(self, employee_id: str, status: EmployeeStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE employees SET status=%s WHERE employee_id=%s", (status.value, employee_id))
            return cur.rowcount > 0

    def replace_shifts(self, employee_id: str, shifts: Sequence[ShiftDetail]) -> None:
        # delete + insert commit together
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employee_shifts WHERE employee_id=%s", (employee_id,))
            _insert_shifts(cur, employee_id, shifts)
