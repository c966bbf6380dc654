from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

from ..core.enums import AttendanceStatus
from ..employees.model import Employee


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one day."""

    attendance_id: int
    admin_id: str
    employee_id: str
    work_date: date
    status: AttendanceStatus
    remarks: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_public_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "adminId": self.admin_id,
            "employeeId": self.employee_id,
            "date": self.work_date.isoformat(),
            "status": self.status.value,
            "remarks": self.remarks,
        }


@dataclass(frozen=True)
class AttendanceEntry:
    """One line of a bulk mark request."""

    employee_id: str
    status: AttendanceStatus
    remarks: str = ""


@dataclass(frozen=True)
class BulkMarkResult:
    inserted: List[AttendanceRecord] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def to_public_dict(self) -> dict:
        return {
            "inserted": [r.to_public_dict() for r in self.inserted],
            "skipped": list(self.skipped),
        }


@dataclass(frozen=True)
class AttendanceHistoryRow:
    """Read-model: attendance left-joined with employee identity fields."""

    record: AttendanceRecord
    employee_code: Optional[str]
    full_name: Optional[str]
    department: Optional[str]

    def to_public_dict(self) -> dict:
        return {
            **self.record.to_public_dict(),
            "employeeCode": self.employee_code,
            "fullName": self.full_name,
            "department": self.department,
        }


@dataclass(frozen=True)
class AttendanceDay:
    work_date: date
    records: List[AttendanceHistoryRow]

    def to_public_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "records": [r.to_public_dict() for r in self.records],
        }


@dataclass(frozen=True)
class EmployeeDayView:
    """An employee with today's record, or ``None`` when not yet marked."""

    employee: Employee
    attendance: Optional[AttendanceRecord]

    def to_public_dict(self) -> dict:
        return {
            **self.employee.to_public_dict(),
            "attendance": self.attendance.to_public_dict() if self.attendance else None,
        }
