from __future__ import annotations

from typing import Iterable

from ..common.datetime_utils import as_date, ms_to_hours
from ..presence.model import ProjectStat
from .model import DayStats

DAY_ABBREVIATIONS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def short_day_label(value: str) -> str:
    """'2025-11-13' -> 'Thu 13'."""
    d = as_date(value)
    return f"{DAY_ABBREVIATIONS[d.weekday()]} {d.day}"


def daily_chart(daily_stats: Iterable[DayStats]) -> dict:
    """Bar-chart series (hours per day) for a period's daily stats."""
    days = list(daily_stats)
    return {
        "labels": [short_day_label(d.date) for d in days],
        "presence_hours": [ms_to_hours(d.presence_time) for d in days],
        "project_hours": [ms_to_hours(d.project_time) for d in days],
        "completion_status": [d.is_complete for d in days],
    }


def project_pie_chart(project_stats: Iterable[ProjectStat]) -> dict:
    stats = list(project_stats)
    return {
        "labels": [p.project_name for p in stats],
        "hours": [ms_to_hours(p.duration) for p in stats],
        "percentages": [p.percentage for p in stats],
        "colors": [p.project_color for p in stats],
    }
