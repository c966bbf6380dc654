from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    leave_id: int
    admin_id: str
    employee_id: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus = LeaveStatus.PENDING
    rejection_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == LeaveStatus.PENDING

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def to_public_dict(self) -> dict:
        return {
            "id": self.leave_id,
            "adminId": self.admin_id,
            "employeeId": self.employee_id,
            "leaveType": self.leave_type.value,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "days": self.days,
            "reason": self.reason,
            "status": self.status.value,
            "rejectionReason": self.rejection_reason,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class LeaveHistoryRow:
    """Read-model for the admin listing: request plus who asked for it."""

    request: LeaveRequest
    employee_code: Optional[str]
    full_name: Optional[str]

    def to_public_dict(self) -> dict:
        return {
            **self.request.to_public_dict(),
            "employeeCode": self.employee_code,
            "fullName": self.full_name,
        }
