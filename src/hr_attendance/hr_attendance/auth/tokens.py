"""Access/refresh token issuing, verification and rotation.

Tokens are HS256 JWTs. Access and refresh tokens are signed with two
different secrets; the ``type`` claim is checked as well, so a refresh token
can never be used where an access token is expected.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

import jwt

from ..core.constants import DEFAULT_ACCESS_TOKEN_MINUTES, DEFAULT_REFRESH_TOKEN_DAYS, TOKEN_ALGORITHM
from ..core.enums import IdentityKind
from ..core.exceptions import TokenExpiredError, TokenInvalidError
from .model import Session, TokenPair
from .repository import SessionRepository

logger = logging.getLogger(__name__)

ACCESS = "access"
REFRESH = "refresh"
_RESERVED_CLAIMS = frozenset({"id", "type", "iat", "exp", "jti"})


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def token_digest(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class TokenSettings:
    access_secret: str
    refresh_secret: str
    access_ttl: timedelta = timedelta(minutes=DEFAULT_ACCESS_TOKEN_MINUTES)
    refresh_ttl: timedelta = timedelta(days=DEFAULT_REFRESH_TOKEN_DAYS)


class TokenIssuer:
    def __init__(
        self,
        settings: TokenSettings,
        sessions: SessionRepository,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if not settings.access_secret or not settings.refresh_secret:
            raise ValueError("Access and refresh token secrets must be configured")
        if settings.access_secret == settings.refresh_secret:
            raise ValueError("Access and refresh tokens must be signed with distinct secrets")

        self._settings = settings
        self._sessions = sessions
        self._clock = clock or utc_now

    @property
    def settings(self) -> TokenSettings:
        return self._settings

    def _encode(self, payload: Dict[str, Any], secret: str) -> str:
        return jwt.encode(payload, secret, algorithm=TOKEN_ALGORITHM)

    def issue(self, identity_id: str, claims: Optional[Dict[str, Any]] = None) -> TokenPair:
        """Mint a signed access/refresh pair. Nothing is persisted here."""
        now = self._clock()
        access_exp = now + self._settings.access_ttl
        refresh_exp = now + self._settings.refresh_ttl

        access_payload = {k: v for k, v in (claims or {}).items() if k not in _RESERVED_CLAIMS}
        access_payload.update(id=identity_id, type=ACCESS, iat=now, exp=access_exp, jti=uuid.uuid4().hex)

        # jti keeps two pairs minted within the same second distinct.
        refresh_payload = {"id": identity_id, "type": REFRESH, "iat": now, "exp": refresh_exp, "jti": uuid.uuid4().hex}

        return TokenPair(
            access_token=self._encode(access_payload, self._settings.access_secret),
            refresh_token=self._encode(refresh_payload, self._settings.refresh_secret),
            access_expires_at=access_exp,
            refresh_expires_at=refresh_exp,
        )

    def _decode(self, token: str, secret: str, expected_type: str) -> Dict[str, Any]:
        try:
            claims = jwt.decode(
                token,
                secret,
                algorithms=[TOKEN_ALGORITHM],
                options={"require": ["exp", "iat", "id", "type"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise TokenInvalidError("Invalid token") from e

        if claims.get("type") != expected_type or not isinstance(claims.get("id"), str):
            raise TokenInvalidError("Invalid token")
        return claims

    def verify_access(self, token: str) -> Dict[str, Any]:
        return self._decode(token, self._settings.access_secret, ACCESS)

    def verify_refresh(self, token: str) -> Dict[str, Any]:
        return self._decode(token, self._settings.refresh_secret, REFRESH)

    def rotate(self, identity_id: str, *, kind: IdentityKind, claims: Optional[Dict[str, Any]] = None) -> TokenPair:
        """Issue a fresh pair and replace the identity's stored session.

        Whatever refresh token was stored before stops matching. Two concurrent
        rotations for one identity leave only the last write valid.
        """
        pair = self.issue(identity_id, {**(claims or {}), "kind": kind.value})
        self._sessions.replace(
            Session(
                identity_id=identity_id,
                identity_kind=kind,
                token_hash=token_digest(pair.refresh_token),
                issued_at=self._clock(),
                expires_at=pair.refresh_expires_at,
            )
        )
        logger.debug("Rotated session for %s %s", kind.value, identity_id)
        return pair

    def redeem(self, refresh_token: str) -> Session:
        """Check a presented refresh token against the stored session."""
        claims = self.verify_refresh(refresh_token)
        session = self._sessions.get(claims["id"])
        if not session or not hmac.compare_digest(session.token_hash, token_digest(refresh_token)):
            logger.warning("Rejected refresh token for %s: expired or used", claims["id"])
            raise TokenInvalidError("Refresh token expired or used")
        return session

    def revoke(self, identity_id: str) -> None:
        self._sessions.delete(identity_id)
