from __future__ import annotations

from dataclasses import asdict, dataclass

from ..presence.model import ProjectStat


@dataclass(frozen=True)
class DayStats:
    date: str
    presence_time: int
    project_time: int
    is_complete: bool
    has_entries: bool


@dataclass(frozen=True)
class PeriodSummary:
    start_date: str
    end_date: str
    total_days: int
    worked_days: int
    complete_days: int
    incomplete_days: int


@dataclass(frozen=True)
class TimeTotals:
    total_presence: int
    total_project: int
    average_presence_per_day: int
    average_project_per_day: int


@dataclass(frozen=True)
class IncompleteDay:
    date: str
    presence_time: int
    missing_time: int


@dataclass(frozen=True)
class PeriodStats:
    """Read-model for the week/month report (durations in ms)."""

    period: PeriodSummary
    time: TimeTotals
    daily_stats: list[DayStats]
    project_stats: list[ProjectStat]
    incomplete_days_list: list[IncompleteDay]

    def to_dict(self) -> dict:
        return asdict(self)
