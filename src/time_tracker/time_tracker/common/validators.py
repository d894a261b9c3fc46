from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value


def require_not_future(value: datetime, field_name: str, *, now: datetime) -> datetime:
    if value > now:
        raise ValidationError(f"{field_name} cannot be in the future")
    return value


def require_ordered(start: datetime, end: Optional[datetime]) -> None:
    """An end, when set, may not precede its start."""
    if end is not None and end < start:
        raise ValidationError("end_time cannot be before start_time")
