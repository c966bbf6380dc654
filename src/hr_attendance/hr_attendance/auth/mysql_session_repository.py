from __future__ import annotations

from typing import Optional

from ..core.enums import IdentityKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Session
from .repository import SessionRepository


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, identity_id: str) -> Optional[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT identity_id, identity_kind, token_hash, issued_at, expires_at
                FROM sessions
                WHERE identity_id=%s
                """,
                (identity_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Session(
                identity_id=r["identity_id"],
                identity_kind=IdentityKind(r["identity_kind"]),
                token_hash=r["token_hash"],
                issued_at=r["issued_at"],
                expires_at=r["expires_at"],
            )

    def replace(self, session: Session) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO sessions(identity_id, identity_kind, token_hash, issued_at, expires_at)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    identity_kind=VALUES(identity_kind),
                    token_hash=VALUES(token_hash),
                    issued_at=VALUES(issued_at),
                    expires_at=VALUES(expires_at)
                """,
                (
                    session.identity_id,
                    session.identity_kind.value,
                    session.token_hash,
                    session.issued_at.replace(tzinfo=None),
                    session.expires_at.replace(tzinfo=None),
                ),
            )

    def delete(self, identity_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sessions WHERE identity_id=%s", (identity_id,))
            return cur.rowcount > 0
