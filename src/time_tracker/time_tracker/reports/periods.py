"""Calendar helpers for report periods.

Weeks run Monday to Sunday. All functions accept a date, a datetime or a
YYYY-MM-DD string and return plain dates (or ISO date strings for ranges).
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Iterator

from ..common.datetime_utils import DateLike, as_date, format_date
from ..core.enums import PeriodType
from ..core.exceptions import ValidationError

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def _shift(d: date, days: int) -> date:
    try:
        return d + timedelta(days=days)
    except OverflowError:
        raise ValidationError(f"Date out of supported range: {format_date(d)} {days:+d} days") from None


def get_week_start(value: DateLike) -> date:
    d = as_date(value)
    weekday = d.isoweekday() % 7  # 0=Sunday .. 6=Saturday
    # Sunday closes the previous week instead of opening a new one
    offset = -weekday + (-6 if weekday == 0 else 1)
    return _shift(d, offset)


def get_week_end(value: DateLike) -> date:
    return _shift(get_week_start(value), 6)


def get_month_start(value: DateLike) -> date:
    d = as_date(value)
    return d.replace(day=1)


def get_month_end(value: DateLike) -> date:
    d = as_date(value)
    return d.replace(day=calendar.monthrange(d.year, d.month)[1])


def generate_date_range(start: DateLike, end: DateLike) -> Iterator[str]:
    """Yield every day from start to end inclusive as YYYY-MM-DD.

    Nothing is yielded when start is after end. Each call builds a fresh
    generator from the bounds.
    """
    current = as_date(start)
    last = as_date(end)
    while current <= last:
        yield format_date(current)
        if current == last:
            break
        current += timedelta(days=1)


def get_previous_week(value: DateLike) -> tuple[date, date]:
    start = _shift(get_week_start(value), -7)
    return start, get_week_end(start)


def get_next_week(value: DateLike) -> tuple[date, date]:
    start = _shift(get_week_start(value), 7)
    return start, get_week_end(start)


def get_previous_month(value: DateLike) -> tuple[date, date]:
    d = _shift(get_month_start(value), -1)
    return get_month_start(d), get_month_end(d)


def get_next_month(value: DateLike) -> tuple[date, date]:
    d = _shift(get_month_end(value), 1)
    return get_month_start(d), get_month_end(d)


def get_week_number(value: DateLike) -> int:
    """ISO-8601 week number."""
    return as_date(value).isocalendar()[1]


def format_period_name(start: DateLike, end: DateLike, period_type: PeriodType | str) -> str:
    period_type = PeriodType(period_type)
    start_d, end_d = as_date(start), as_date(end)

    if period_type == PeriodType.WEEK:
        return f"Week {get_week_number(start_d)} ({format_date(start_d)} - {format_date(end_d)})"
    if period_type == PeriodType.MONTH:
        return f"{MONTH_NAMES[start_d.month - 1]} {start_d.year}"
    return f"{format_date(start_d)} - {format_date(end_d)}"


def format_date_range(start: DateLike, end: DateLike) -> str:
    """Compact label such as '13-19 Nov 2025' or '27 Oct - 2 Nov 2025'."""
    s, e = as_date(start), as_date(end)
    s_mon, e_mon = MONTH_NAMES[s.month - 1][:3], MONTH_NAMES[e.month - 1][:3]

    if s.year == e.year and s.month == e.month:
        return f"{s.day}-{e.day} {s_mon} {s.year}"
    if s.year == e.year:
        return f"{s.day} {s_mon} - {e.day} {e_mon} {s.year}"
    return f"{s.day} {s_mon} {s.year} - {e.day} {e_mon} {e.year}"
