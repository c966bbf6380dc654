from __future__ import annotations

from functools import wraps
from typing import Optional, Union

from flask import g, request

from ..auth.gate import AuthorizationGate, KindGate
from ..auth.model import Principal
from ..auth.resolver import IdentityResolver, extract_token

Gate = Union[AuthorizationGate, KindGate]


def guarded(resolver: IdentityResolver, gate: Optional[Gate] = None):
    """Resolve the caller once per request, then apply ``gate`` if given."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            principal = resolver.resolve(extract_token(request.cookies, request.headers))
            if gate is not None:
                gate.check(principal)
            g.principal = principal
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_principal() -> Principal:
    return g.principal
