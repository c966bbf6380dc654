from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AdminRole


@dataclass(frozen=True)
class Admin:
    """Domain entity: Admin identity.

    Note: plain data object, no DB access code.
    """

    admin_id: str
    username: str
    email: str
    phone: str
    role: AdminRole
    password_hash: str
    created_at: Optional[datetime] = None

    def to_public_dict(self) -> dict:
        return {
            "id": self.admin_id,
            "username": self.username,
            "email": self.email,
            "phone": self.phone,
            "role": self.role.value,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
