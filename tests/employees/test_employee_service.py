from __future__ import annotations

from datetime import date, datetime

import pytest

from src.hr_attendance.hr_attendance.core.enums import AdminRole, EmployeeStatus, EmployeeType
from src.hr_attendance.hr_attendance.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def service(container):
    return container.employee_service


def _register(service, admin_id, **overrides):
    fields = dict(
        admin_id=admin_id,
        employee_code="EMP900",
        full_name="Jane Roe",
        email="Jane.Roe@Example.com",
        phone="9000000001",
        designation="Analyst",
        employee_type="Contract",
        password="Secret123",
        today=date(2026, 3, 16),
    )
    fields.update(overrides)
    return service.register(**fields)


def test_register_normalizes_and_defaults_joining_date(service, make_admin):
    admin = make_admin()

    emp = _register(service, admin.admin_id)

    assert emp.email == "jane.roe@example.com"
    assert emp.employee_type == EmployeeType.CONTRACT
    assert emp.joining_date == date(2026, 3, 16)
    assert emp.status == EmployeeStatus.ACTIVE
    assert emp.admin_id == admin.admin_id
    assert emp.password_hash != "Secret123"


def test_duplicate_email_or_code_conflicts(service, make_admin):
    admin = make_admin()
    _register(service, admin.admin_id)

    with pytest.raises(ConflictError):
        _register(service, admin.admin_id, employee_code="EMP901")
    with pytest.raises(ConflictError):
        _register(service, admin.admin_id, email="other@example.com")


@pytest.mark.parametrize(
    "overrides",
    [
        {"email": "not-an-email"},
        {"phone": "12345"},
        {"employee_type": "Freelancer"},
        {"password": "weak"},
        {"full_name": "   "},
        {"joining_date": "2026-13-40"},
    ],
)
def test_register_validation(service, make_admin, overrides):
    with pytest.raises(ValidationError):
        _register(service, make_admin().admin_id, **overrides)


def test_get_checks_ownership(service, make_admin, make_employee):
    owner, other = make_admin(), make_admin()
    emp = make_employee(owner)

    assert service.get(owner.admin_id, emp.employee_id) == emp
    with pytest.raises(AuthorizationError):
        service.get(other.admin_id, emp.employee_id)
    with pytest.raises(NotFoundError):
        service.get(owner.admin_id, "missing")


def test_update_cannot_move_employee_to_another_admin(service, make_admin, make_employee):
    owner, other = make_admin(), make_admin()
    emp = make_employee(owner)

    with pytest.raises(ValidationError):
        service.update(owner.admin_id, emp.employee_id, {"admin_id": other.admin_id})
    assert service.get(owner.admin_id, emp.employee_id).admin_id == owner.admin_id


def test_update_rechecks_email_uniqueness(service, make_admin, make_employee):
    admin = make_admin()
    a, b = make_employee(admin), make_employee(admin)

    with pytest.raises(ConflictError):
        service.update(admin.admin_id, a.employee_id, {"email": b.email})

    updated = service.update(admin.admin_id, a.employee_id, {"email": a.email, "designation": "Lead"})
    assert updated.designation == "Lead"


def test_update_requires_a_change(service, make_admin, make_employee):
    admin = make_admin()
    emp = make_employee(admin)

    with pytest.raises(ValidationError):
        service.update(admin.admin_id, emp.employee_id, {"unknown": "x", "phone": None})


def test_list_filters_by_status(service, make_admin, make_employee):
    admin = make_admin()
    active = make_employee(admin)
    make_employee(admin, status=EmployeeStatus.INACTIVE)
    make_employee(make_admin())

    assert len(service.list_employees(admin.admin_id)) == 2
    assert service.list_employees(admin.admin_id, status="active") == [active]
    with pytest.raises(ValidationError):
        service.list_employees(admin.admin_id, status="retired")


def test_deactivate_is_a_soft_delete(service, employees, make_admin, make_employee):
    admin = make_admin()
    emp = make_employee(admin)

    result = service.deactivate(admin.admin_id, emp.employee_id)

    assert result.status == EmployeeStatus.INACTIVE
    assert employees.get_by_id(emp.employee_id) is not None
    with pytest.raises(AuthorizationError):
        service.deactivate(make_admin().admin_id, emp.employee_id)


def test_super_admin_deactivates_any_employee(service, employees, make_admin, make_employee):
    hr = make_admin(AdminRole.HR)
    boss = make_admin(AdminRole.SUPER_ADMIN)
    emp = make_employee(hr)

    with pytest.raises(AuthorizationError):
        service.deactivate(boss.admin_id, emp.employee_id)

    result = service.deactivate(boss.admin_id, emp.employee_id, role=AdminRole.SUPER_ADMIN)

    assert result.status == EmployeeStatus.INACTIVE
    assert result.admin_id == hr.admin_id
    with pytest.raises(NotFoundError):
        service.deactivate(boss.admin_id, "missing", role=AdminRole.SUPER_ADMIN)


def _shift(number=1, day="2026-03-17", start="2026-03-17T09:00:00", end="2026-03-17T17:00:00"):
    return {"shiftNumber": number, "date": day, "startTime": start, "endTime": end}


def test_register_stores_shift_details(service, make_admin):
    evening = _shift(2, start="2026-03-17T18:00:00Z", end="2026-03-17T22:00:00Z")

    emp = _register(service, make_admin().admin_id, shift_details=[_shift(), evening])

    assert [s.shift_number for s in emp.shifts] == [1, 2]
    assert emp.shifts[0].shift_date == date(2026, 3, 17)
    assert emp.shifts[0].start_time == datetime(2026, 3, 17, 9, 0)
    assert emp.shifts[1].end_time == datetime(2026, 3, 17, 22, 0)
    assert emp.to_public_dict()["shiftDetails"][0]["shiftNumber"] == 1


def test_register_wraps_a_single_shift(service, make_admin):
    emp = _register(service, make_admin().admin_id, shift_details=_shift(3))

    assert [s.shift_number for s in emp.shifts] == [3]


@pytest.mark.parametrize(
    "shifts",
    [
        "morning",
        [_shift(number="first")],
        [_shift(day=None)],
        [_shift(start="not-a-time")],
        [_shift(end="2026-03-17T09:00:00")],
        [_shift(end="2026-03-17T08:00:00")],
        [{"shiftNumber": 1, "date": "2026-03-17", "startTime": "2026-03-17T09:00:00"}],
    ],
)
def test_register_rejects_malformed_shifts(service, make_admin, shifts):
    with pytest.raises(ValidationError):
        _register(service, make_admin().admin_id, shift_details=shifts)


def test_update_replaces_shift_schedule(service, make_admin, make_employee):
    admin = make_admin()
    emp = make_employee(admin)

    updated = service.update(admin.admin_id, emp.employee_id, {"shift_details": [_shift(5)]})
    assert [s.shift_number for s in updated.shifts] == [5]

    with pytest.raises(ValidationError):
        service.update(admin.admin_id, emp.employee_id, {"shift_details": [_shift(end="2026-03-17T08:00:00")]})
    assert [s.shift_number for s in service.get(admin.admin_id, emp.employee_id).shifts] == [5]
