from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from ..admins.model import Admin
from ..admins.repository import AdminRepository
from ..admins.service import password_matches
from ..core.enums import IdentityKind
from ..core.exceptions import AuthenticationError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import Principal, TokenPair
from .tokens import TokenIssuer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    principal: Principal
    tokens: TokenPair


def _claims_for(identity: Union[Admin, Employee]) -> Tuple[IdentityKind, dict]:
    if isinstance(identity, Admin):
        return IdentityKind.ADMIN, {
            "email": identity.email,
            "username": identity.username,
            "role": identity.role.value,
        }
    return IdentityKind.EMPLOYEE, {
        "email": identity.email,
        "employeeCode": identity.employee_code,
        "fullName": identity.full_name,
    }


def _principal_for(identity: Union[Admin, Employee]) -> Principal:
    if isinstance(identity, Admin):
        return Principal(identity_id=identity.admin_id, kind=IdentityKind.ADMIN, identity=identity, role=identity.role)
    return Principal(identity_id=identity.employee_id, kind=IdentityKind.EMPLOYEE, identity=identity)


class AuthService:
    """Use case: login, refresh-token rotation and logout for both identity classes."""

    def __init__(self, admins: AdminRepository, employees: EmployeeRepository, issuer: TokenIssuer):
        self._admins = admins
        self._employees = employees
        self._issuer = issuer

    def _start_session(self, identity: Union[Admin, Employee]) -> LoginResult:
        principal = _principal_for(identity)
        kind, claims = _claims_for(identity)
        tokens = self._issuer.rotate(principal.identity_id, kind=kind, claims=claims)
        return LoginResult(principal=principal, tokens=tokens)

    @staticmethod
    def _require_password(password: Optional[str]) -> str:
        if not password or not password.strip():
            raise ValidationError("Password is required")
        return password

    def login_admin(self, *, password: str, email: Optional[str] = None, username: Optional[str] = None) -> LoginResult:
        email = (email or "").strip().lower()
        username = (username or "").strip()
        if not email and not username:
            raise ValidationError("Username or Email required")
        password = self._require_password(password)

        admin = self._admins.get_by_email(email) if email else None
        if not admin and username:
            admin = self._admins.get_by_username(username)

        if not admin or not password_matches(admin.password_hash, password):
            raise AuthenticationError("Invalid credentials")

        logger.info("Admin %s logged in", admin.admin_id)
        return self._start_session(admin)

    def login_employee(
        self, *, password: str, email: Optional[str] = None, employee_code: Optional[str] = None
    ) -> LoginResult:
        email = (email or "").strip().lower()
        employee_code = (employee_code or "").strip()
        if not email and not employee_code:
            raise ValidationError("Employee ID or Email required")
        password = self._require_password(password)

        employee = self._employees.get_by_code(employee_code) if employee_code else None
        if not employee and email:
            employee = self._employees.get_by_email(email)

        if not employee or not employee.is_active or not password_matches(employee.password_hash, password):
            raise AuthenticationError("Invalid credentials")

        logger.info("Employee %s logged in", employee.employee_id)
        return self._start_session(employee)

    def refresh(self, refresh_token: Optional[str], *, kind: Optional[IdentityKind] = None) -> LoginResult:
        """Consume a refresh token: redeem it, then rotate to a fresh pair.

        ``kind`` restricts the endpoint to one identity class.
        """
        if not refresh_token:
            raise AuthenticationError("Unauthorized request - Refresh token missing")

        try:
            session = self._issuer.redeem(refresh_token)
        except AuthenticationError as e:
            raise AuthenticationError("Invalid refresh token") from e

        if kind is not None and session.identity_kind != kind:
            raise AuthenticationError("Invalid refresh token")

        identity: Union[Admin, Employee, None]
        if session.identity_kind == IdentityKind.ADMIN:
            identity = self._admins.get_by_id(session.identity_id)
        else:
            employee = self._employees.get_by_id(session.identity_id)
            identity = employee if employee and employee.is_active else None

        if identity is None:
            self._issuer.revoke(session.identity_id)
            raise AuthenticationError("Invalid refresh token")

        return self._start_session(identity)

    def logout(self, principal: Principal) -> None:
        self._issuer.revoke(principal.identity_id)
        logger.info("%s %s logged out", principal.kind.value.capitalize(), principal.identity_id)
