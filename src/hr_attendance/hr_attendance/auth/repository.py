from __future__ import annotations

from typing import Optional, Protocol

from .model import Session


class SessionRepository(Protocol):
    """Bounded session table: at most one row per identity."""

    def get(self, identity_id: str) -> Optional[Session]:
        raise NotImplementedError

    def replace(self, session: Session) -> None:
        """Insert or overwrite the identity's session (last writer wins)."""

        raise NotImplementedError

    def delete(self, identity_id: str) -> bool:
        raise NotImplementedError
