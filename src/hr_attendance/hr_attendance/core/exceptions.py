from __future__ import annotations

from typing import Any, Optional, Sequence


class DomainError(Exception):
    """Base exception for business rule violations.

    Each subclass carries the HTTP status the boundary answers with.
    """

    status_code = 400

    def __init__(self, message: str, errors: Optional[Sequence[Any]] = None):
        super().__init__(message)
        self.message = message
        self.errors = list(errors or [])


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400


class AuthenticationError(DomainError):
    """Raised when credentials or tokens are missing, invalid or expired."""

    status_code = 401


class TokenInvalidError(AuthenticationError):
    """Bad signature, malformed payload, wrong token type or a used refresh token."""


class TokenExpiredError(AuthenticationError):
    """Token signature is valid but its ``exp`` is in the past."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission (role or ownership) for an action."""

    status_code = 403


class NotFoundError(DomainError):
    status_code = 404


class ConflictError(DomainError):
    """Uniqueness violation or an attempt to leave a terminal state."""

    status_code = 409


class InternalError(DomainError):
    """Store failure or other unexpected condition."""

    status_code = 500
