from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable

from ..core.enums import AdminRole, IdentityKind
from ..core.exceptions import AuthorizationError
from .model import Principal


@dataclass(frozen=True)
class AuthorizationGate:
    """Role check for admin routes. Pure: never touches storage."""

    allowed_roles: FrozenSet[AdminRole]

    def check(self, principal: Principal) -> Principal:
        if not principal.is_admin or principal.role is None:
            raise AuthorizationError("Admin access required")
        if principal.role not in self.allowed_roles:
            raise AuthorizationError(
                f"Admin with role {principal.role.value} is not allowed to access this resource"
            )
        return principal


@dataclass(frozen=True)
class KindGate:
    kind: IdentityKind

    def check(self, principal: Principal) -> Principal:
        if principal.kind != self.kind:
            raise AuthorizationError(f"{self.kind.value.capitalize()} access required")
        return principal


def require_role(allowed: Iterable[AdminRole]) -> AuthorizationGate:
    return AuthorizationGate(frozenset(allowed))


SUPER_ADMIN_ONLY = require_role({AdminRole.SUPER_ADMIN})
HR_ADMINS = require_role({AdminRole.HR, AdminRole.SUPER_ADMIN})
ALL_ADMINS = require_role({AdminRole.ADMIN, AdminRole.HR, AdminRole.SUPER_ADMIN})
EMPLOYEES_ONLY = KindGate(IdentityKind.EMPLOYEE)
