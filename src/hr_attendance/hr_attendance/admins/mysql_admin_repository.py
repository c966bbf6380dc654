from __future__ import annotations

from typing import Optional

from ..core.enums import AdminRole
from ..core.exceptions import InternalError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Admin
from .repository import AdminRepository

_COLUMNS = "admin_id, username, email, phone, role, password_hash, created_at"


def _to_admin(row: dict) -> Admin:
    return Admin(
        admin_id=row["admin_id"],
        username=row["username"],
        email=row["email"],
        phone=row["phone"],
        role=AdminRole(row["role"]),
        password_hash=row["password_hash"],
        created_at=row.get("created_at"),
    )


class MySQLAdminRepository(AdminRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, column: str, value: str) -> Optional[Admin]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM admins WHERE {column}=%s", (value,))
            row = fetchone(cur)
            return _to_admin(row) if row else None

    def get_by_id(self, admin_id: str) -> Optional[Admin]:
        return self._get_one("admin_id", admin_id)

    def get_by_email(self, email: str) -> Optional[Admin]:
        return self._get_one("email", email)

    def get_by_username(self, username: str) -> Optional[Admin]:
        return self._get_one("username", username)

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
        with db_cursor(self._conn_factory, conflict_message="Admin with this username or email already exists") as (_, cur):
            cur.execute(
                """
                INSERT INTO admins(admin_id, username, email, phone, role, password_hash)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (admin_id, username, email, phone, role.value, password_hash),
            )
        created = self.get_by_id(admin_id)
        if not created:
            raise InternalError("Something went wrong while registering the admin")
        return created

    def update_profile(self, admin_id: str, *, username: Optional[str] = None, phone: Optional[str] = None) -> bool:
        sets: list[str] = []
        params: list[object] = []
        if username is not None:
            sets.append("username=%s")
            params.append(username)
        if phone is not None:
            sets.append("phone=%s")
            params.append(phone)
        if not sets:
            return False

        with db_cursor(self._conn_factory, conflict_message="Username already taken") as (_, cur):
            cur.execute(
                f"UPDATE admins SET {', '.join(sets)} WHERE admin_id=%s",
                tuple(params + [admin_id]),
            )
            return cur.rowcount > 0

    def set_password_hash(self, admin_id: str, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE admins SET password_hash=%s WHERE admin_id=%s", (password_hash, admin_id))
            return cur.rowcount > 0
