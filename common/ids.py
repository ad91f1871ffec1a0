"""
common.ids
~~~~~~~~~~
Identifier coercion shared by the service layer.
"""
from __future__ import annotations

import uuid


def parse_uuid(value: object) -> uuid.UUID | None:
    """Return *value* as a :class:`uuid.UUID`, or ``None`` if it is not one."""
    if value is None:
        return None
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


def parse_int(value: object) -> int | None:
    """Return *value* as a positive ``int`` primary key, or ``None``."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = int(str(value))
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None
