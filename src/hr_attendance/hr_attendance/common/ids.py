"""Identity id generation.

Admins and employees draw ids from this one generator, so the two identity
classes share a single id space and an admin id never equals an employee id.
"""

from __future__ import annotations

import uuid


def new_identity_id() -> str:
    return uuid.uuid4().hex
