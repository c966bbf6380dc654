from __future__ import annotations

import logging
from datetime import date
from itertools import groupby
from typing import List, Mapping, Optional, Sequence, Union

from ..common.datetime_utils import parse_optional_date, today_local
from ..common.validators import require_enum
from ..core.enums import AttendanceStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import (
    AttendanceDay,
    AttendanceEntry,
    AttendanceHistoryRow,
    AttendanceRecord,
    BulkMarkResult,
    EmployeeDayView,
)
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

EntryInput = Union[AttendanceEntry, Mapping]


def _to_entry(item: EntryInput) -> AttendanceEntry:
    if isinstance(item, AttendanceEntry):
        return item
    if not isinstance(item, Mapping):
        raise ValidationError("Each attendance record must be an object")

    employee_id = str(item.get("employee_id") or "").strip()
    if not employee_id:
        raise ValidationError("Employee ID is required for every record")

    return AttendanceEntry(
        employee_id=employee_id,
        status=require_enum(AttendanceStatus, item.get("status"), "attendance status"),
        remarks=str(item.get("remarks") or "").strip(),
    )


class AttendanceService:
    """Use case: the attendance ledger, one record per employee per day."""

    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository):
        self._attendance = attendance
        self._employees = employees

    def mark_bulk(
        self,
        admin_id: str,
        records: Sequence[EntryInput],
        *,
        work_date=None,
        today: Optional[date] = None,
    ) -> BulkMarkResult:
        """Upsert a batch for one day.

        Entries naming employees the admin does not own (or who are inactive)
        are skipped and reported back; the rest are written together.
        """
        if not records:
            raise ValidationError("Attendance records are required")

        entries = [_to_entry(item) for item in records]
        day = parse_optional_date(work_date, "Date") or today or today_local()

        owned = self._employees.list_ids_for_admin(admin_id, active_only=True)

        accepted: dict = {}
        skipped: List[str] = []
        for entry in entries:
            if entry.employee_id in owned:
                # last entry wins for duplicates within one batch
                accepted[entry.employee_id] = entry
            elif entry.employee_id not in skipped:
                skipped.append(entry.employee_id)

        if not accepted:
            raise ValidationError("No valid employees found to mark attendance")

        inserted = self._attendance.upsert_many(
            admin_id=admin_id, work_date=day, entries=list(accepted.values())
        )
        if skipped:
            logger.warning("Admin %s: skipped %d unowned employee(s) on %s", admin_id, len(skipped), day)
        logger.info("Admin %s marked attendance for %d employee(s) on %s", admin_id, len(inserted), day)
        return BulkMarkResult(inserted=list(inserted), skipped=skipped)

    def get_today(self, admin_id: str, *, today: Optional[date] = None) -> List[EmployeeDayView]:
        """Each active employee of the admin, paired with today's record if any."""
        day = today or today_local()
        by_employee = {r.employee_id: r for r in self._attendance.list_for_admin_on(admin_id, day)}
        return [
            EmployeeDayView(employee=e, attendance=by_employee.get(e.employee_id))
            for e in self._employees.list_for_admin(admin_id)
            if e.is_active
        ]

    def update(self, admin_id: str, attendance_id, *, status=None, remarks: Optional[str] = None) -> AttendanceRecord:
        try:
            attendance_id = int(attendance_id)
        except (TypeError, ValueError):
            raise ValidationError("Attendance ID is required")

        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise NotFoundError("Attendance record not found")
        if record.admin_id != admin_id:
            raise AuthorizationError("Attendance record does not belong to this admin")

        if status is None and remarks is None:
            raise ValidationError("Status or remarks must be provided")

        new_status = require_enum(AttendanceStatus, status, "attendance status") if status is not None else record.status
        new_remarks = str(remarks).strip() if remarks is not None else record.remarks

        self._attendance.update(attendance_id, status=new_status, remarks=new_remarks)
        updated = self._attendance.get_by_id(attendance_id)
        if not updated:
            raise NotFoundError("Attendance record not found")
        return updated

    @staticmethod
    def _window(start_date, end_date, today: Optional[date]):
        start = parse_optional_date(start_date, "Start date")
        end = parse_optional_date(end_date, "End date") or today or today_local()
        if start and start > end:
            raise ValidationError("Start date cannot be after end date")
        return start, end

    def history(
        self,
        admin_id: str,
        *,
        start_date=None,
        end_date=None,
        today: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> List[AttendanceDay]:
        """Admin view, grouped by day (newest first)."""
        start, end = self._window(start_date, end_date, today)
        rows = self._attendance.history_rows(admin_id=admin_id, start_date=start, end_date=end, limit=limit)
        ordered = sorted(rows, key=lambda r: r.record.work_date, reverse=True)
        return [
            AttendanceDay(work_date=day, records=list(group))
            for day, group in groupby(ordered, key=lambda r: r.record.work_date)
        ]

    def employee_history(
        self,
        employee_id: str,
        *,
        start_date=None,
        end_date=None,
        today: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> List[AttendanceHistoryRow]:
        start, end = self._window(start_date, end_date, today)
        rows = self._attendance.history_rows(employee_id=employee_id, start_date=start, end_date=end, limit=limit)
        return sorted(rows, key=lambda r: r.record.work_date, reverse=True)
