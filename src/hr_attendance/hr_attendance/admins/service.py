from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.ids import new_identity_id
from ..common.validators import (
    require_email,
    require_enum,
    require_non_empty,
    require_phone,
    require_strong_password,
)
from ..core.enums import AdminRole
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from .model import Admin
from .repository import AdminRepository

logger = logging.getLogger(__name__)


def password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password or "")
    except (TypeError, ValueError):
        # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
        return False


class AdminService:
    """Use case: admin registration and self-service profile management."""

    def __init__(self, admins: AdminRepository):
        self._admins = admins

    def register(self, *, username: str, email: str, phone, role, password: str) -> Admin:
        username = require_non_empty(username, "Username")
        email = require_email(email)
        phone = require_phone(phone)
        role = require_enum(AdminRole, role, "admin role")
        require_strong_password(password)

        if self._admins.get_by_username(username) or self._admins.get_by_email(email):
            raise ConflictError("Admin with this username or email already exists")

        admin = self._admins.create(
            admin_id=new_identity_id(),
            username=username,
            email=email,
            phone=phone,
            role=role,
            password_hash=generate_password_hash(password),
        )
        logger.info("Registered admin %s with role %s", admin.admin_id, admin.role.value)
        return admin

    def profile(self, admin_id: str) -> Admin:
        admin = self._admins.get_by_id(admin_id)
        if not admin:
            raise NotFoundError("Admin profile not found")
        return admin

    def update_profile(self, admin_id: str, *, username: Optional[str] = None, phone=None) -> Admin:
        changes: dict = {}

        if username is not None and str(username).strip():
            username = str(username).strip()
            existing = self._admins.get_by_username(username)
            if existing and existing.admin_id != admin_id:
                raise ConflictError("Username already taken")
            changes["username"] = username

        if phone:
            changes["phone"] = require_phone(phone)

        if not changes:
            raise ValidationError("No valid fields provided for update")

        self.profile(admin_id)
        self._admins.update_profile(admin_id, **changes)
        return self.profile(admin_id)

    def change_password(self, admin_id: str, *, current_password: str, new_password: str) -> None:
        if not current_password or not new_password:
            raise ValidationError("Current password and new password are required")

        admin = self.profile(admin_id)
        if not password_matches(admin.password_hash, current_password):
            raise AuthenticationError("Current password is incorrect")

        require_strong_password(new_password, "New password")
        self._admins.set_password_hash(admin_id, generate_password_hash(new_password))
        logger.info("Admin %s changed password", admin_id)
