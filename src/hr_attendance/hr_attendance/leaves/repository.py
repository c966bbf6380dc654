from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveHistoryRow, LeaveRequest


class LeaveRepository(Protocol):
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
        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def decide(self, leave_id: int, *, status: LeaveStatus, rejection_reason: Optional[str]) -> bool:
        """Apply a decision only while the request is still pending."""

        raise NotImplementedError

    def delete(self, leave_id: int) -> bool:
        raise NotImplementedError

    def history_rows(
        self,
        *,
        admin_id: Optional[str] = None,
        employee_id: Optional[str] = None,
        status: Optional[LeaveStatus] = None,
        limit: Optional[int] = None,
    ) -> Sequence[LeaveHistoryRow]:
        raise NotImplementedError
