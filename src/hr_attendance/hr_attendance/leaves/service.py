from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import parse_optional_date, today_local
from ..common.validators import require_enum, require_non_empty
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import LeaveHistoryRow, LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

_DECISIONS = (LeaveStatus.APPROVED, LeaveStatus.REJECTED)


class LeaveService:
    """Use case: leave requests, Pending -> Approved | Rejected.

    A decided request is terminal. Deciding it again with the same outcome
    returns it unchanged; any other outcome is a conflict.
    """

    def __init__(self, leaves: LeaveRepository, employees: EmployeeRepository):
        self._leaves = leaves
        self._employees = employees

    @staticmethod
    def _parse_id(leave_id) -> int:
        try:
            return int(leave_id)
        except (TypeError, ValueError):
            raise ValidationError("Leave ID is required")

    def _get(self, leave_id) -> LeaveRequest:
        request = self._leaves.get_by_id(self._parse_id(leave_id))
        if not request:
            raise NotFoundError("Leave request not found")
        return request

    def apply(
        self,
        employee_id: str,
        *,
        leave_type,
        start_date,
        end_date,
        reason: str,
        today: Optional[date] = None,
    ) -> LeaveRequest:
        leave_type = require_enum(LeaveType, leave_type, "leave type")
        start = parse_optional_date(start_date, "Start date")
        end = parse_optional_date(end_date, "End date")
        if start is None or end is None:
            raise ValidationError("Start date and end date are required")
        reason = require_non_empty(reason, "Reason")

        today = today or today_local()
        if start < today:
            raise ValidationError("Start date cannot be in the past")
        if start > end:
            raise ValidationError("Start date cannot be after end date")

        employee = self._employees.get_by_id(employee_id)
        if not employee or not employee.is_active:
            raise NotFoundError("Employee not found")

        request = self._leaves.create(
            admin_id=employee.admin_id,
            employee_id=employee.employee_id,
            leave_type=leave_type,
            start_date=start,
            end_date=end,
            reason=reason,
        )
        logger.info(
            "Employee %s applied for %s (%s..%s), leave %s",
            employee_id, leave_type.value, start, end, request.leave_id,
        )
        return request

    def decide(self, leave_id, admin_id: str, *, status, rejection_reason: Optional[str] = None) -> LeaveRequest:
        request = self._get(leave_id)
        if request.admin_id != admin_id:
            raise AuthorizationError("Leave request does not belong to this admin")

        status = require_enum(LeaveStatus, status, "leave status")
        if status not in _DECISIONS:
            raise ValidationError("Status must be Approved or Rejected")

        reason: Optional[str] = None
        if status == LeaveStatus.REJECTED:
            reason = require_non_empty(rejection_reason, "Rejection reason")

        if not request.is_pending:
            if request.status == status:
                return request
            raise ConflictError(f"Leave request has already been {request.status.value.lower()}")

        if not self._leaves.decide(request.leave_id, status=status, rejection_reason=reason):
            # another admin decided in between
            current = self._get(request.leave_id)
            if current.status == status:
                return current
            raise ConflictError(f"Leave request has already been {current.status.value.lower()}")

        logger.info("Admin %s set leave %s to %s", admin_id, request.leave_id, status.value)
        return self._get(request.leave_id)

    def withdraw(self, leave_id, employee_id: str) -> None:
        request = self._get(leave_id)
        if request.employee_id != employee_id:
            raise AuthorizationError("Leave request does not belong to this employee")
        self._leaves.delete(request.leave_id)
        logger.info("Employee %s withdrew leave %s", employee_id, request.leave_id)

    def admin_history(
        self, admin_id: str, *, status=None, limit: Optional[int] = None
    ) -> Sequence[LeaveHistoryRow]:
        status = require_enum(LeaveStatus, status, "leave status") if status else None
        return self._leaves.history_rows(admin_id=admin_id, status=status, limit=limit)

    def employee_history(
        self, employee_id: str, *, status=None, limit: Optional[int] = None
    ) -> Sequence[LeaveRequest]:
        status = require_enum(LeaveStatus, status, "leave status") if status else None
        rows = self._leaves.history_rows(employee_id=employee_id, status=status, limit=limit)
        return [row.request for row in rows]
