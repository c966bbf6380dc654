from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple

from ..core.enums import EmployeeStatus, EmployeeType


@dataclass(frozen=True)
class ShiftDetail:
    """One scheduled shift; ``end_time`` is strictly after ``start_time``."""

    shift_number: int
    shift_date: date
    start_time: datetime
    end_time: datetime

    def to_public_dict(self) -> dict:
        return {
            "shiftNumber": self.shift_number,
            "date": self.shift_date.isoformat(),
            "startTime": self.start_time.isoformat(),
            "endTime": self.end_time.isoformat(),
        }


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee identity.

    ``admin_id`` is the owning admin; it is fixed at creation.
    """

    employee_id: str
    employee_code: str
    admin_id: str
    full_name: str
    email: str
    phone: str
    designation: str
    joining_date: date
    employee_type: EmployeeType
    password_hash: str
    department: Optional[str] = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    created_at: Optional[datetime] = None
    shifts: Tuple[ShiftDetail, ...] = ()

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE

    def to_public_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "employeeCode": self.employee_code,
            "adminId": self.admin_id,
            "fullName": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "designation": self.designation,
            "department": self.department,
            "joiningDate": self.joining_date.isoformat(),
            "employeeType": self.employee_type.value,
            "status": self.status.value,
            "shiftDetails": [s.to_public_dict() for s in self.shifts],
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
