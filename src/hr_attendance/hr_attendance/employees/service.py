from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Mapping, Optional, Sequence, Tuple

from werkzeug.security import generate_password_hash

from ..common.datetime_utils import parse_iso_datetime, parse_optional_date, today_local
from ..common.ids import new_identity_id
from ..common.validators import (
    require_email,
    require_enum,
    require_non_empty,
    require_phone,
    require_strong_password,
)
from ..core.enums import AdminRole, EmployeeStatus, EmployeeType
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from .model import Employee, ShiftDetail
from .repository import UPDATABLE_FIELDS, EmployeeRepository

logger = logging.getLogger(__name__)

_BAD_SHIFTS = "Invalid shift details format or values"


def parse_shift_details(value) -> Tuple[ShiftDetail, ...]:
    """Validate a ``shiftDetails`` payload. A single mapping counts as a one-item list."""
    if value is None:
        return ()
    if isinstance(value, Mapping):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ValidationError(_BAD_SHIFTS)

    shifts = []
    for item in value:
        if isinstance(item, ShiftDetail):
            shifts.append(item)
            continue
        if not isinstance(item, Mapping):
            raise ValidationError(_BAD_SHIFTS)
        try:
            number = int(item.get("shiftNumber"))
        except (TypeError, ValueError):
            raise ValidationError(_BAD_SHIFTS)
        shift_date = parse_optional_date(item.get("date"), "Shift date")
        if shift_date is None:
            raise ValidationError(_BAD_SHIFTS)
        if isinstance(shift_date, datetime):
            shift_date = shift_date.date()
        start = parse_iso_datetime(item.get("startTime"), "Shift start time")
        end = parse_iso_datetime(item.get("endTime"), "Shift end time")
        if end <= start:
            raise ValidationError("Shift end time must be after start time")
        shifts.append(ShiftDetail(shift_number=number, shift_date=shift_date, start_time=start, end_time=end))
    return tuple(shifts)


class EmployeeService:
    """Use case: admins manage the employees they own."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def register(
        self,
        *,
        admin_id: str,
        employee_code: str,
        full_name: str,
        email: str,
        phone,
        designation: str,
        employee_type,
        password: str,
        department: Optional[str] = None,
        joining_date=None,
        shift_details=None,
        today: Optional[date] = None,
    ) -> Employee:
        employee_code = require_non_empty(employee_code, "Employee ID")
        full_name = require_non_empty(full_name, "Full name")
        email = require_email(email)
        phone = require_phone(phone)
        designation = require_non_empty(designation, "Designation")
        employee_type = require_enum(EmployeeType, employee_type, "employee type")
        require_strong_password(password)
        joined = parse_optional_date(joining_date, "Joining date") or today or today_local()
        department = (department or "").strip() or None
        shifts = parse_shift_details(shift_details)

        if self._employees.get_by_code(employee_code) or self._employees.get_by_email(email):
            raise ConflictError("Employee with this ID or Email already exists")

        employee = self._employees.create(
            employee_id=new_identity_id(),
            employee_code=employee_code,
            admin_id=admin_id,
            full_name=full_name,
            email=email,
            phone=phone,
            designation=designation,
            department=department,
            joining_date=joined,
            employee_type=employee_type,
            password_hash=generate_password_hash(password),
            shifts=shifts,
        )
        logger.info("Admin %s registered employee %s (%s)", admin_id, employee.employee_id, employee_code)
        return employee

    def list_employees(self, admin_id: str, *, status=None) -> Sequence[Employee]:
        status = require_enum(EmployeeStatus, status, "status") if status else None
        return self._employees.list_for_admin(admin_id, status=status)

    def get(self, admin_id: str, employee_id: str) -> Employee:
        """Fetch an employee owned by ``admin_id``."""
        employee = self._employees.get_by_id(employee_id) if employee_id else None
        if not employee:
            raise NotFoundError("Employee not found")
        if employee.admin_id != admin_id:
            raise AuthorizationError("Employee does not belong to this admin")
        return employee

    def update(self, admin_id: str, employee_id: str, changes: dict) -> Employee:
        if "admin_id" in changes:
            raise ValidationError("Owning admin of an employee cannot be changed")

        employee = self.get(admin_id, employee_id)
        clean: dict = {}
        shifts = None
        if changes.get("shift_details") is not None:
            shifts = parse_shift_details(changes["shift_details"])

        for key, value in changes.items():
            if key not in UPDATABLE_FIELDS or value is None:
                continue
            if key == "email":
                value = require_email(value)
                other = self._employees.get_by_email(value)
                if other and other.employee_id != employee.employee_id:
                    raise ConflictError("Employee with this Email already exists")
            elif key == "phone":
                value = require_phone(value)
            elif key == "employee_type":
                value = require_enum(EmployeeType, value, "employee type")
            elif key == "joining_date":
                value = parse_optional_date(value, "Joining date")
                if value is None:
                    continue
            elif key == "department":
                value = str(value).strip() or None
            else:
                value = require_non_empty(value, key.replace("_", " ").capitalize())
            clean[key] = value

        if not clean and shifts is None:
            raise ValidationError("No valid fields provided for update")

        if clean:
            self._employees.update(employee.employee_id, clean)
        if shifts is not None:
            self._employees.replace_shifts(employee.employee_id, shifts)
        return self.get(admin_id, employee_id)

    def deactivate(self, admin_id: str, employee_id: str, *, role: Optional[AdminRole] = None) -> Employee:
        """Soft delete: identities are never removed.

        A Super Admin may deactivate any employee; other admins only their own.
        """
        if role == AdminRole.SUPER_ADMIN:
            employee = self._employees.get_by_id(employee_id) if employee_id else None
            if not employee:
                raise NotFoundError("Employee not found")
        else:
            employee = self.get(admin_id, employee_id)
        if employee.is_active:
            self._employees.set_status(employee.employee_id, EmployeeStatus.INACTIVE)
            logger.info("Admin %s deactivated employee %s", admin_id, employee.employee_id)
        return self._employees.get_by_id(employee.employee_id)
