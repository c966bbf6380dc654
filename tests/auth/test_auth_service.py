from __future__ import annotations

import pytest

from src.hr_attendance.hr_attendance.core.enums import AdminRole, EmployeeStatus, IdentityKind
from src.hr_attendance.hr_attendance.core.exceptions import AuthenticationError, ValidationError



@pytest.fixture
def auth(container):
    return container.auth_service


def test_admin_login_by_email_or_username(auth, sessions, make_admin, password):
    admin = make_admin(AdminRole.ADMIN)

    by_email = auth.login_admin(email=admin.email.upper(), password=password)
    by_username = auth.login_admin(username=admin.username, password=password)

    assert by_email.principal.identity_id == admin.admin_id
    assert by_username.principal.role == AdminRole.ADMIN
    assert sessions.get(admin.admin_id).identity_kind == IdentityKind.ADMIN


def test_admin_login_rejects_wrong_password(auth, make_admin, password):
    admin = make_admin()

    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        auth.login_admin(email=admin.email, password="Wrong1234")
    with pytest.raises(AuthenticationError):
        auth.login_admin(email="nobody@example.com", password=password)


def test_login_requires_identifier_and_password(auth, password):
    with pytest.raises(ValidationError):
        auth.login_admin(password=password)
    with pytest.raises(ValidationError):
        auth.login_admin(email="a@example.com", password="  ")
    with pytest.raises(ValidationError):
        auth.login_employee(password=password)


def test_employee_login_by_code(auth, make_admin, make_employee, password):
    emp = make_employee(make_admin())

    result = auth.login_employee(employee_code=emp.employee_code, password=password)

    assert result.principal.kind == IdentityKind.EMPLOYEE
    assert result.principal.identity_id == emp.employee_id


def test_inactive_employee_cannot_login(auth, make_admin, make_employee, password):
    emp = make_employee(make_admin(), status=EmployeeStatus.INACTIVE)

    with pytest.raises(AuthenticationError):
        auth.login_employee(email=emp.email, password=password)


def test_refresh_rotates_and_burns_the_old_token(auth, make_admin, password):
    admin = make_admin()
    login = auth.login_admin(email=admin.email, password=password)

    refreshed = auth.refresh(login.tokens.refresh_token)

    assert refreshed.principal.identity_id == admin.admin_id
    assert refreshed.tokens.refresh_token != login.tokens.refresh_token
    with pytest.raises(AuthenticationError, match="Invalid refresh token"):
        auth.refresh(login.tokens.refresh_token)


def test_second_login_invalidates_first_session(auth, make_admin, make_employee, password):
    emp = make_employee(make_admin())
    first = auth.login_employee(email=emp.email, password=password)
    auth.login_employee(email=emp.email, password=password)

    with pytest.raises(AuthenticationError):
        auth.refresh(first.tokens.refresh_token)


def test_refresh_is_bound_to_identity_kind(auth, make_admin, make_employee, password):
    emp = make_employee(make_admin())
    login = auth.login_employee(email=emp.email, password=password)

    with pytest.raises(AuthenticationError):
        auth.refresh(login.tokens.refresh_token, kind=IdentityKind.ADMIN)

    refreshed = auth.refresh(login.tokens.refresh_token, kind=IdentityKind.EMPLOYEE)
    assert refreshed.principal.kind == IdentityKind.EMPLOYEE


def test_refresh_missing_token(auth):
    with pytest.raises(AuthenticationError, match="Refresh token missing"):
        auth.refresh(None)


def test_logout_revokes_session(auth, sessions, make_admin, password):
    admin = make_admin()
    login = auth.login_admin(email=admin.email, password=password)

    auth.logout(login.principal)

    assert sessions.get(admin.admin_id) is None
    with pytest.raises(AuthenticationError):
        auth.refresh(login.tokens.refresh_token)


def test_refresh_for_deactivated_employee_drops_session(auth, employees, sessions, make_admin, make_employee, password):
    emp = make_employee(make_admin())
    login = auth.login_employee(email=emp.email, password=password)
    employees.set_status(emp.employee_id, EmployeeStatus.INACTIVE)

    with pytest.raises(AuthenticationError):
        auth.refresh(login.tokens.refresh_token)
    assert sessions.get(emp.employee_id) is None
