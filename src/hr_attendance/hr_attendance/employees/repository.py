from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence, Set

from ..core.enums import EmployeeStatus, EmployeeType
from .model import Employee, ShiftDetail

# Columns an update may touch. admin_id is deliberately absent.
UPDATABLE_FIELDS = frozenset(
    {"full_name", "email", "phone", "designation", "department", "joining_date", "employee_type"}
)


class EmployeeRepository(Protocol):
    """Credential store contract for Employee identities."""

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        raise NotImplementedError

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
        raise NotImplementedError

    def list_for_admin(self, admin_id: str, *, status: Optional[EmployeeStatus] = None) -> Sequence[Employee]:
        raise NotImplementedError

    def list_ids_for_admin(self, admin_id: str, *, active_only: bool = True) -> Set[str]:
        """One round-trip: the id set used for bulk ownership filtering."""

        raise NotImplementedError

    def update(self, employee_id: str, changes: dict) -> bool:
        """Apply ``changes`` restricted to UPDATABLE_FIELDS."""

        raise NotImplementedError

    def set_status(self, employee_id: str, status: EmployeeStatus) -> bool:
        raise NotImplementedError

    def replace_shifts(self, employee_id: str, shifts: Sequence[ShiftDetail]) -> None:
        """Swap the whole shift schedule of an employee."""

        raise NotImplementedError
