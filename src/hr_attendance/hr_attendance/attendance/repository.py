from __future__ import annotations

from datetime import date
from typing import List, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceEntry, AttendanceHistoryRow, AttendanceRecord


class AttendanceRepository(Protocol):
    def upsert_many(self, *, admin_id: str, work_date: date, entries: Sequence[AttendanceEntry]) -> List[AttendanceRecord]:
        """Insert or overwrite one row per (employee_id, work_date)."""

        raise NotImplementedError

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_admin_on(self, admin_id: str, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def update(self, attendance_id: int, *, status: AttendanceStatus, remarks: str) -> bool:
        raise NotImplementedError

    def history_rows(
        self,
        *,
        admin_id: Optional[str] = None,
        employee_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> Sequence[AttendanceHistoryRow]:
        """Rows inside the inclusive window, newest day first."""

        raise NotImplementedError
