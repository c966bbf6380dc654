from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from ..admins.model import Admin
from ..core.enums import AdminRole, IdentityKind
from ..employees.model import Employee


@dataclass(frozen=True)
class Session:
    """The one active session of an identity.

    Only a digest of the refresh token is kept; a new login or rotation
    replaces the row, so at most one refresh token is valid per identity.
    """

    identity_id: str
    identity_kind: IdentityKind
    token_hash: str
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    access_expires_at: datetime
    refresh_expires_at: datetime


@dataclass(frozen=True)
class Principal:
    """The identity a request was resolved to. Exactly one kind, never both."""

    identity_id: str
    kind: IdentityKind
    identity: Union[Admin, Employee]
    role: Optional[AdminRole] = None

    @property
    def is_admin(self) -> bool:
        return self.kind == IdentityKind.ADMIN

    @property
    def owning_admin_id(self) -> str:
        """Admin scope: the admin itself, or the employee's owning admin."""
        if isinstance(self.identity, Employee):
            return self.identity.admin_id
        return self.identity_id

    def to_public_dict(self) -> dict:
        return {"userType": self.kind.value, **self.identity.to_public_dict()}
