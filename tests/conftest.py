from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.hr_attendance.hr_attendance.admins.model import Admin
from src.hr_attendance.hr_attendance.attendance.model import AttendanceHistoryRow, AttendanceRecord
from src.hr_attendance.hr_attendance.auth.model import Session
from src.hr_attendance.hr_attendance.auth.tokens import TokenIssuer, TokenSettings
from src.hr_attendance.hr_attendance.common.ids import new_identity_id
from src.hr_attendance.hr_attendance.container import assemble
from src.hr_attendance.hr_attendance.core.enums import AdminRole, EmployeeStatus, EmployeeType, LeaveStatus
from src.hr_attendance.hr_attendance.core.exceptions import ConflictError
from src.hr_attendance.hr_attendance.employees.model import Employee
from src.hr_attendance.hr_attendance.employees.repository import UPDATABLE_FIELDS
from src.hr_attendance.hr_attendance.leaves.model import LeaveHistoryRow, LeaveRequest

PASSWORD = "Passw0rd123"
TODAY = date(2026, 3, 16)

# cheap hash so fixtures stay fast
_FAST_HASH = "pbkdf2:sha256:1000"


class InMemoryAdmins:
    def __init__(self):
        self.by_id: dict[str, Admin] = {}

    def get_by_id(self, admin_id):
        return self.by_id.get(admin_id)

    def get_by_email(self, email):
        return next((a for a in self.by_id.values() if a.email == email), None)

    def get_by_username(self, username):
        return next((a for a in self.by_id.values() if a.username == username), None)

    def create(self, *, admin_id, username, email, phone, role, password_hash):
        if self.get_by_email(email) or self.get_by_username(username):
            raise ConflictError("Admin with this username or email already exists")
        admin = Admin(
            admin_id=admin_id,
            username=username,
            email=email,
            phone=phone,
            role=role,
            password_hash=password_hash,
            created_at=datetime(2026, 1, 1, 9, 0, 0),
        )
        self.by_id[admin_id] = admin
        return admin

    def update_profile(self, admin_id, *, username=None, phone=None):
        admin = self.by_id.get(admin_id)
        if not admin:
            return False
        self.by_id[admin_id] = replace(
            admin,
            username=username if username is not None else admin.username,
            phone=phone if phone is not None else admin.phone,
        )
        return True

    def set_password_hash(self, admin_id, password_hash):
        admin = self.by_id.get(admin_id)
        if not admin:
            return False
        self.by_id[admin_id] = replace(admin, password_hash=password_hash)
        return True


class InMemoryEmployees:
    def __init__(self):
        self.by_id: dict[str, Employee] = {}

    def get_by_id(self, employee_id):
        return self.by_id.get(employee_id)

    def get_by_email(self, email):
        return next((e for e in self.by_id.values() if e.email == email), None)

    def get_by_code(self, employee_code):
        return next((e for e in self.by_id.values() if e.employee_code == employee_code), None)

    def create(self, *, employee_id, **fields):
        if self.get_by_email(fields["email"]) or self.get_by_code(fields["employee_code"]):
            raise ConflictError("Employee with this ID or Email already exists")
        employee = Employee(employee_id=employee_id, created_at=datetime(2026, 1, 2, 9, 0, 0), **fields)
        self.by_id[employee_id] = employee
        return employee

    def list_for_admin(self, admin_id, *, status=None):
        return [
            e for e in self.by_id.values()
            if e.admin_id == admin_id and (status is None or e.status == status)
        ]

    def list_ids_for_admin(self, admin_id, *, active_only=True):
        return {
            e.employee_id for e in self.by_id.values()
            if e.admin_id == admin_id and (e.is_active or not active_only)
        }

    def update(self, employee_id, changes):
        employee = self.by_id.get(employee_id)
        if not employee:
            return False
        clean = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
        self.by_id[employee_id] = replace(employee, **clean)
        return True

    def set_status(self, employee_id, status):
        employee = self.by_id.get(employee_id)
        if not employee:
            return False
        self.by_id[employee_id] = replace(employee, status=status)
        return True

    def replace_shifts(self, employee_id, shifts):
        employee = self.by_id[employee_id]
        self.by_id[employee_id] = replace(employee, shifts=tuple(shifts))


class InMemorySessions:
    def __init__(self):
        self.by_identity: dict[str, Session] = {}

    def get(self, identity_id):
        return self.by_identity.get(identity_id)

    def replace(self, session):
        self.by_identity[session.identity_id] = session

    def delete(self, identity_id):
        return self.by_identity.pop(identity_id, None) is not None


class InMemoryAttendance:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self.by_key: dict[tuple[str, date], AttendanceRecord] = {}
        self.upsert_calls = 0
        self._next_id = 1

    def upsert_many(self, *, admin_id, work_date, entries):
        self.upsert_calls += 1
        out = []
        for e in entries:
            existing = self.by_key.get((e.employee_id, work_date))
            if existing:
                record = replace(existing, status=e.status, remarks=e.remarks)
            else:
                record = AttendanceRecord(
                    attendance_id=self._next_id,
                    admin_id=admin_id,
                    employee_id=e.employee_id,
                    work_date=work_date,
                    status=e.status,
                    remarks=e.remarks,
                )
                self._next_id += 1
            self.by_key[(e.employee_id, work_date)] = record
            out.append(record)
        return out

    def get_by_id(self, attendance_id):
        return next((r for r in self.by_key.values() if r.attendance_id == int(attendance_id)), None)

    def list_for_admin_on(self, admin_id, work_date):
        return [r for r in self.by_key.values() if r.admin_id == admin_id and r.work_date == work_date]

    def update(self, attendance_id, *, status, remarks):
        record = self.get_by_id(attendance_id)
        if not record:
            return False
        self.by_key[(record.employee_id, record.work_date)] = replace(record, status=status, remarks=remarks)
        return True

    def history_rows(self, *, admin_id=None, employee_id=None, start_date=None, end_date=None, limit=None):
        rows = []
        for r in self.by_key.values():
            if admin_id is not None and r.admin_id != admin_id:
                continue
            if employee_id is not None and r.employee_id != employee_id:
                continue
            if start_date is not None and r.work_date < start_date:
                continue
            if end_date is not None and r.work_date > end_date:
                continue
            e = self._employees.get_by_id(r.employee_id)
            rows.append(
                AttendanceHistoryRow(
                    record=r,
                    employee_code=e.employee_code if e else None,
                    full_name=e.full_name if e else None,
                    department=e.department if e else None,
                )
            )
        rows.sort(key=lambda row: row.record.work_date, reverse=True)
        return rows[:limit]


class InMemoryLeaves:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self.by_id: dict[int, LeaveRequest] = {}
        self._next_id = 1

    def create(self, *, admin_id, employee_id, leave_type, start_date, end_date, reason):
        request = LeaveRequest(
            leave_id=self._next_id,
            admin_id=admin_id,
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            created_at=datetime(2026, 3, 1, 9, 0, self._next_id % 60),
        )
        self.by_id[request.leave_id] = request
        self._next_id += 1
        return request

    def get_by_id(self, leave_id):
        return self.by_id.get(int(leave_id))

    def decide(self, leave_id, *, status, rejection_reason):
        request = self.by_id.get(int(leave_id))
        if not request or request.status != LeaveStatus.PENDING:
            return False
        self.by_id[request.leave_id] = replace(request, status=status, rejection_reason=rejection_reason)
        return True

    def delete(self, leave_id):
        return self.by_id.pop(int(leave_id), None) is not None

    def history_rows(self, *, admin_id=None, employee_id=None, status=None, limit=None):
        rows = []
        for r in sorted(self.by_id.values(), key=lambda x: x.leave_id, reverse=True):
            if admin_id is not None and r.admin_id != admin_id:
                continue
            if employee_id is not None and r.employee_id != employee_id:
                continue
            if status is not None and r.status != status:
                continue
            e = self._employees.get_by_id(r.employee_id)
            rows.append(
                LeaveHistoryRow(
                    request=r,
                    employee_code=e.employee_code if e else None,
                    full_name=e.full_name if e else None,
                )
            )
        return rows[:limit]


@pytest.fixture
def admins():
    return InMemoryAdmins()


@pytest.fixture
def employees():
    return InMemoryEmployees()


@pytest.fixture
def sessions():
    return InMemorySessions()


@pytest.fixture
def attendance_repo(employees):
    return InMemoryAttendance(employees)


@pytest.fixture
def leaves_repo(employees):
    return InMemoryLeaves(employees)


@pytest.fixture
def token_settings():
    return TokenSettings(access_secret="access-secret-for-tests", refresh_secret="refresh-secret-for-tests")


@pytest.fixture
def issuer(token_settings, sessions):
    return TokenIssuer(token_settings, sessions)


@pytest.fixture
def container(admins, employees, sessions, attendance_repo, leaves_repo, token_settings):
    return assemble(
        admins_repo=admins,
        employees_repo=employees,
        sessions_repo=sessions,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        token_settings=token_settings,
        cookie_secure=False,
    )


@pytest.fixture
def make_admin(admins):
    counter = {"n": 0}

    def _make(role: AdminRole = AdminRole.HR, *, admin_id: Optional[str] = None) -> Admin:
        counter["n"] += 1
        n = counter["n"]
        return admins.create(
            admin_id=admin_id or new_identity_id(),
            username=f"admin{n}",
            email=f"admin{n}@example.com",
            phone="9876543210",
            role=role,
            password_hash=generate_password_hash(PASSWORD, method=_FAST_HASH),
        )

    return _make


@pytest.fixture
def make_employee(employees):
    counter = {"n": 0}

    def _make(
        admin: Admin,
        *,
        employee_id: Optional[str] = None,
        status: EmployeeStatus = EmployeeStatus.ACTIVE,
    ) -> Employee:
        counter["n"] += 1
        n = counter["n"]
        employee = employees.create(
            employee_id=employee_id or new_identity_id(),
            employee_code=f"EMP{n:03d}",
            admin_id=admin.admin_id,
            full_name=f"Employee {n}",
            email=f"emp{n}@example.com",
            phone="9123456780",
            designation="Engineer",
            department="R&D",
            joining_date=date(2025, 6, 1),
            employee_type=EmployeeType.FULL_TIME,
            password_hash=generate_password_hash(PASSWORD, method=_FAST_HASH),
        )
        if status != EmployeeStatus.ACTIVE:
            employees.set_status(employee.employee_id, status)
            employee = employees.get_by_id(employee.employee_id)
        return employee

    return _make


@pytest.fixture
def password():
    return PASSWORD


@pytest.fixture
def today():
    return TODAY
