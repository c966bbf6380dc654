from __future__ import annotations

import logging
from typing import Mapping, Optional

from ..admins.repository import AdminRepository
from ..core.constants import ACCESS_COOKIE
from ..core.enums import IdentityKind
from ..core.exceptions import AuthenticationError
from ..employees.repository import EmployeeRepository
from .model import Principal
from .tokens import TokenIssuer

logger = logging.getLogger(__name__)

_BEARER = "Bearer "


def extract_token(cookies: Mapping[str, str], headers: Mapping[str, str]) -> Optional[str]:
    """Access token from the ``accessToken`` cookie, else the Authorization header."""
    token = cookies.get(ACCESS_COOKIE)
    if token:
        return token
    auth = headers.get("Authorization") or ""
    if auth.startswith(_BEARER):
        return auth[len(_BEARER):].strip() or None
    return None


class IdentityResolver:
    """Map an access token to exactly one identity and role.

    Lookup order is fixed: admins first, then employees. Ids come from one
    generator so the stores never share an id; in addition the token's ``kind``
    claim must agree with the store that matched, otherwise the request is
    refused instead of being granted another class's role.
    """

    def __init__(self, issuer: TokenIssuer, admins: AdminRepository, employees: EmployeeRepository):
        self._issuer = issuer
        self._admins = admins
        self._employees = employees

    def resolve(self, token: Optional[str]) -> Principal:
        if not token:
            raise AuthenticationError("Unauthorized request")

        try:
            claims = self._issuer.verify_access(token)
        except AuthenticationError as e:
            # Expired and malformed tokens look the same to the caller.
            raise AuthenticationError("Invalid access token") from e

        principal = self._lookup(claims["id"])
        if principal is None:
            raise AuthenticationError("Invalid access token")

        claimed_kind = claims.get("kind")
        if claimed_kind is not None and claimed_kind != principal.kind.value:
            logger.warning(
                "Token kind %r does not match resolved %s identity %s",
                claimed_kind,
                principal.kind.value,
                principal.identity_id,
            )
            raise AuthenticationError("Invalid access token")

        return principal

    def _lookup(self, identity_id: str) -> Optional[Principal]:
        admin = self._admins.get_by_id(identity_id)
        if admin:
            return Principal(identity_id=admin.admin_id, kind=IdentityKind.ADMIN, identity=admin, role=admin.role)

        employee = self._employees.get_by_id(identity_id)
        if employee and employee.is_active:
            return Principal(identity_id=employee.employee_id, kind=IdentityKind.EMPLOYEE, identity=employee)
        return None
