from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..common.datetime_utils import DateLike, format_date, round_half_up
from ..entries import model as entries_model
from ..entries.model import PunchEntry
from ..presence.calculator import PresenceCalculator
from ..projects.model import Project
from ..sessions import model as sessions_model
from ..sessions.model import ProjectSession
from .model import DayStats, IncompleteDay, PeriodStats, PeriodSummary, TimeTotals
from .periods import generate_date_range, get_month_end, get_month_start, get_week_end, get_week_start

log = logging.getLogger(__name__)


def _average(total: int, count: int) -> int:
    return round_half_up(total / count) if count > 0 else 0


class PeriodAggregator:
    """Roll single-day presence up into week/month/custom period statistics."""

    def __init__(self, calculator: Optional[PresenceCalculator] = None):
        self._calculator = calculator or PresenceCalculator()

    @property
    def calculator(self) -> PresenceCalculator:
        return self._calculator

    def calculate_day_stats(
        self,
        date: str,
        entries: Iterable[PunchEntry],
        sessions: Iterable[ProjectSession],
    ) -> DayStats:
        day_entries = entries_model.filter_by_date(date, entries)
        day_sessions = sessions_model.filter_by_date(date, sessions)

        presence = self._calculator.calculate_presence_time(day_entries)
        return DayStats(
            date=date,
            presence_time=presence,
            project_time=self._calculator.calculate_total_project_time(day_sessions),
            is_complete=self._calculator.is_work_day_complete(presence),
            has_entries=len(day_entries) > 0,
        )

    def calculate_period_stats(
        self,
        *,
        start_date: DateLike,
        end_date: DateLike,
        entries: Iterable[PunchEntry],
        sessions: Iterable[ProjectSession],
        projects: Iterable[Project],
    ) -> PeriodStats:
        entries = list(entries or [])
        sessions = list(sessions or [])
        dates = list(generate_date_range(start_date, end_date))

        daily = [self.calculate_day_stats(d, entries, sessions) for d in dates]

        worked = [d for d in daily if d.has_entries]
        complete = [d for d in daily if d.is_complete]
        incomplete = [d for d in daily if d.has_entries and not d.is_complete]

        total_presence = sum(d.presence_time for d in daily)
        total_project = sum(d.project_time for d in daily)

        in_period = set(dates)
        period_sessions = [s for s in sessions if s.date in in_period]
        project_stats = self._calculator.calculate_project_stats(period_sessions, projects or [])

        log.debug(
            "period %s..%s: %d days, %d worked, %d sessions",
            format_date(start_date), format_date(end_date), len(dates), len(worked), len(period_sessions),
        )

        return PeriodStats(
            period=PeriodSummary(
                start_date=format_date(start_date),
                end_date=format_date(end_date),
                total_days=len(dates),
                worked_days=len(worked),
                complete_days=len(complete),
                incomplete_days=len(incomplete),
            ),
            time=TimeTotals(
                total_presence=total_presence,
                total_project=total_project,
                average_presence_per_day=_average(total_presence, len(worked)),
                average_project_per_day=_average(total_project, len(worked)),
            ),
            daily_stats=daily,
            project_stats=project_stats,
            incomplete_days_list=[
                IncompleteDay(
                    date=d.date,
                    presence_time=d.presence_time,
                    missing_time=self._calculator.get_remaining_time(d.presence_time),
                )
                for d in incomplete
            ],
        )

    def calculate_week_stats(self, date: DateLike, entries, sessions, projects) -> PeriodStats:
        return self.calculate_period_stats(
            start_date=get_week_start(date),
            end_date=get_week_end(date),
            entries=entries,
            sessions=sessions,
            projects=projects,
        )

    def calculate_month_stats(self, date: DateLike, entries, sessions, projects) -> PeriodStats:
        return self.calculate_period_stats(
            start_date=get_month_start(date),
            end_date=get_month_end(date),
            entries=entries,
            sessions=sessions,
            projects=projects,
        )
