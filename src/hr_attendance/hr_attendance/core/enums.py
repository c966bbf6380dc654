from __future__ import annotations

from enum import Enum


class IdentityKind(str, Enum):
    """Which identity class a principal belongs to."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class AdminRole(str, Enum):
    """Authorization tier of an Admin identity."""

    HR = "HR"
    ADMIN = "Admin"
    SUPER_ADMIN = "Super Admin"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class EmployeeType(str, Enum):
    FULL_TIME = "Full-Time"
    CONTRACT = "Contract"
    INTERN = "Intern"


class AttendanceStatus(str, Enum):
    """Daily attendance status stored per (employee, day)."""

    PRESENT = "Present"
    ABSENT = "Absent"
    LEAVE = "Leave"
    HALF_DAY = "Half-Day"
    LATE = "Late"


class LeaveType(str, Enum):
    SICK = "Sick Leave"
    CASUAL = "Casual Leave"
    PAID = "Paid Leave"


class LeaveStatus(str, Enum):
    """Leave workflow state. APPROVED and REJECTED are terminal."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
