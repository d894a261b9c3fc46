from __future__ import annotations

from enum import Enum


class EntryType(str, Enum):
    """Punch types, in the order a normal day records them."""

    CLOCK_IN = "clock-in"
    BREAK_START = "break-start"
    BREAK_END = "break-end"
    CLOCK_OUT = "clock-out"


class DayStatus(str, Enum):
    """Where the working day stands, derived from the punches present."""

    NOT_STARTED = "not-started"
    MORNING = "morning"
    LUNCH = "lunch"
    AFTERNOON = "afternoon"
    COMPLETED = "completed"


class PeriodType(str, Enum):
    WEEK = "week"
    MONTH = "month"
    CUSTOM = "custom"


class SegmentType(str, Enum):
    """Classification of a slice of the day timeline."""

    BREAK = "break"
    IDLE = "idle"
    PROJECT = "project"
    MULTI_PROJECT = "multi-project"
