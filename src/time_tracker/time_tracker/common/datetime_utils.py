from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import Callable, Union

from ..core.constants import DATE_FORMAT, MS_PER_HOUR
from ..core.exceptions import ValidationError

Clock = Callable[[], datetime]
DateLike = Union[date, datetime, str]

_ONE_MS = timedelta(milliseconds=1)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into naive local time.

    Offsets (including a trailing 'Z') are converted to the local zone so the
    result compares cleanly with the naive local clock.
    """
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise ValidationError(f"Invalid timestamp: {value!r}") from e
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def now_local() -> datetime:
    """Current local time.

    Note: Default clock; calculators accept any zero-argument callable instead.
    """
    return datetime.now()


def as_date(value: DateLike) -> date:
    """Normalise a date, datetime or YYYY-MM-DD string to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value))
    except ValueError as e:
        raise ValidationError(f"Invalid date: {value!r}") from e


def format_date(value: DateLike) -> str:
    return as_date(value).strftime(DATE_FORMAT)


def to_millis(delta: timedelta) -> int:
    return delta // _ONE_MS


def elapsed_ms(start: datetime, end: datetime) -> int:
    """Milliseconds from start to end (negative when end is before start)."""
    return to_millis(end - start)


def hours_to_ms(hours: float) -> int:
    return int(round(hours * MS_PER_HOUR))


def ms_to_hours(milliseconds: int) -> float:
    return milliseconds / MS_PER_HOUR


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives, like JavaScript's Math.round."""
    return int(math.floor(value + 0.5))
