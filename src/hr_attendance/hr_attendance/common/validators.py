from __future__ import annotations

import re
from enum import Enum
from typing import Type, TypeVar

from ..core.constants import MIN_PASSWORD_LENGTH, PHONE_DIGITS
from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_RE = re.compile(rf"^\d{{{PHONE_DIGITS}}}$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: str) -> str:
    email = require_non_empty(value, "Email").lower()
    if not _EMAIL_RE.match(email):
        raise ValidationError("Invalid email format")
    return email


def require_phone(value) -> str:
    phone = require_non_empty(str(value) if value is not None else "", "Phone")
    if not _PHONE_RE.match(phone):
        raise ValidationError(f"Invalid phone number. Must be {PHONE_DIGITS} digits")
    return phone


def require_strong_password(value: str, field_name: str = "Password") -> str:
    require_min_length(value, field_name, MIN_PASSWORD_LENGTH)
    if not (re.search(r"[a-z]", value) and re.search(r"[A-Z]", value) and re.search(r"\d", value)):
        raise ValidationError(f"{field_name} must include uppercase, lowercase, and numbers")
    return value


def require_enum(enum_cls: Type[E], value, field_name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Invalid {field_name}. Must be one of: {allowed}")
