from __future__ import annotations

from ..auth.model import TokenPair
from ..core.constants import ACCESS_COOKIE, REFRESH_COOKIE


def set_auth_cookies(response, tokens: TokenPair, *, secure: bool):
    for name, value, expires in (
        (ACCESS_COOKIE, tokens.access_token, tokens.access_expires_at),
        (REFRESH_COOKIE, tokens.refresh_token, tokens.refresh_expires_at),
    ):
        response.set_cookie(name, value, expires=expires, httponly=True, secure=secure, samesite="Strict")
    return response


def clear_auth_cookies(response, *, secure: bool):
    for name in (ACCESS_COOKIE, REFRESH_COOKIE):
        response.delete_cookie(name, httponly=True, secure=secure, samesite="Strict")
    return response
