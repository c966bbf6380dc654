from __future__ import annotations

from datetime import date

import pytest

from src.hr_attendance.hr_attendance.admins.model import Admin
from src.hr_attendance.hr_attendance.auth.gate import (
    ALL_ADMINS,
    EMPLOYEES_ONLY,
    HR_ADMINS,
    SUPER_ADMIN_ONLY,
    require_role,
)
from src.hr_attendance.hr_attendance.auth.model import Principal
from src.hr_attendance.hr_attendance.core.enums import AdminRole, EmployeeType, IdentityKind
from src.hr_attendance.hr_attendance.core.exceptions import AuthorizationError
from src.hr_attendance.hr_attendance.employees.model import Employee


def _admin(role: AdminRole) -> Principal:
    admin = Admin(admin_id="a1", username="u", email="u@example.com", phone="9876543210", role=role, password_hash="x")
    return Principal(identity_id="a1", kind=IdentityKind.ADMIN, identity=admin, role=role)


def _employee() -> Principal:
    emp = Employee(
        employee_id="e1",
        employee_code="EMP001",
        admin_id="a1",
        full_name="Emp",
        email="e@example.com",
        phone="9123456780",
        designation="Engineer",
        joining_date=date(2025, 1, 1),
        employee_type=EmployeeType.INTERN,
        password_hash="x",
    )
    return Principal(identity_id="e1", kind=IdentityKind.EMPLOYEE, identity=emp)


@pytest.mark.parametrize(
    "gate, allowed",
    [
        (SUPER_ADMIN_ONLY, {AdminRole.SUPER_ADMIN}),
        (HR_ADMINS, {AdminRole.HR, AdminRole.SUPER_ADMIN}),
        (ALL_ADMINS, {AdminRole.ADMIN, AdminRole.HR, AdminRole.SUPER_ADMIN}),
    ],
)
def test_canonical_gates(gate, allowed):
    for role in AdminRole:
        principal = _admin(role)
        if role in allowed:
            assert gate.check(principal) is principal
        else:
            with pytest.raises(AuthorizationError):
                gate.check(principal)


def test_admin_gates_reject_employees():
    for gate in (SUPER_ADMIN_ONLY, HR_ADMINS, ALL_ADMINS):
        with pytest.raises(AuthorizationError, match="Admin access required"):
            gate.check(_employee())


def test_admin_gate_requires_admin_kind_and_role():
    assert _admin(AdminRole.HR).is_admin
    assert not _employee().is_admin

    roleless = Principal(identity_id="a1", kind=IdentityKind.ADMIN, identity=_admin(AdminRole.HR).identity)
    assert roleless.is_admin
    with pytest.raises(AuthorizationError, match="Admin access required"):
        ALL_ADMINS.check(roleless)


def test_employee_gate():
    principal = _employee()
    assert EMPLOYEES_ONLY.check(principal) is principal
    with pytest.raises(AuthorizationError):
        EMPLOYEES_ONLY.check(_admin(AdminRole.SUPER_ADMIN))


def test_require_role_accepts_any_iterable():
    gate = require_role([AdminRole.ADMIN])
    assert gate.allowed_roles == frozenset({AdminRole.ADMIN})
