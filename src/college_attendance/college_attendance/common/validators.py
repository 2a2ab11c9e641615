from __future__ import annotations

from typing import Any

from ..core.enums import MarkedBy
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_bool(value: Any, field_name: str) -> bool:
    # bool is checked by type so 0/1 and "true" are rejected.
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a boolean")
    return value


def require_id(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"{field_name} must be a positive integer")
    return value


def require_marked_by(value: Any) -> MarkedBy:
    if isinstance(value, MarkedBy):
        return value
    try:
        return MarkedBy(value)
    except ValueError:
        allowed = ", ".join(m.value for m in MarkedBy)
        raise ValidationError(f"markedBy must be one of: {allowed}")
