from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import AdminRole
from .model import Admin


class AdminRepository(Protocol):
    """Credential store contract for Admin identities.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def get_by_id(self, admin_id: str) -> Optional[Admin]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Admin]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[Admin]:
        raise NotImplementedError

    def create(
        self,
        *,
        admin_id: str,
        username: str,
        email: str,
        phone: str,
        role: AdminRole,
        password_hash: str,
    ) -> Admin:
        raise NotImplementedError

    def update_profile(self, admin_id: str, *, username: Optional[str] = None, phone: Optional[str] = None) -> bool:
        raise NotImplementedError

    def set_password_hash(self, admin_id: str, password_hash: str) -> bool:
        raise NotImplementedError
