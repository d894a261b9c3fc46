from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import Clock, elapsed_ms, hours_to_ms, now_local, round_half_up
from ..core.constants import DEFAULT_PROJECT_COLOR, UNKNOWN_PROJECT_NAME, WORK_DAY_HOURS
from ..core.enums import DayStatus, EntryType
from ..core.exceptions import ValidationError
from ..entries.model import PunchEntry
from ..projects.model import Project, index_by_id
from ..sessions.model import ProjectSession
from .model import ProjectStat

# Exhaustive over DayStatus: one allowed action per status, none once the day is over.
NEXT_ENTRY_BY_STATUS: dict[DayStatus, Optional[EntryType]] = {
    DayStatus.NOT_STARTED: EntryType.CLOCK_IN,
    DayStatus.MORNING: EntryType.BREAK_START,
    DayStatus.LUNCH: EntryType.BREAK_END,
    DayStatus.AFTERNOON: EntryType.CLOCK_OUT,
    DayStatus.COMPLETED: None,
}


def _first_of_type(entries: Sequence[PunchEntry], entry_type: EntryType) -> Optional[PunchEntry]:
    return next((e for e in entries if e.entry_type == entry_type), None)


class PresenceCalculator:
    """Single-day presence, day status and per-project breakdowns.

    Stateless: every method recomputes from the entries/sessions it is given.
    The clock is read only to measure a segment or session that is still open,
    so the host can poll these methods on its own timer.
    """

    def __init__(self, clock: Optional[Clock] = None, *, work_day_hours: float = WORK_DAY_HOURS):
        if work_day_hours <= 0:
            raise ValidationError("work_day_hours must be positive")
        self._clock = clock or now_local
        self._target_ms = hours_to_ms(work_day_hours)

    @property
    def target_ms(self) -> int:
        return self._target_ms

    def now(self):
        return self._clock()

    # ----------------------
    # Presence
    # ----------------------

    def calculate_presence_time(self, entries: Iterable[PunchEntry]) -> int:
        entries = list(entries or [])
        clock_in = _first_of_type(entries, EntryType.CLOCK_IN)
        if not clock_in:
            return 0

        break_start = _first_of_type(entries, EntryType.BREAK_START)
        break_end = _first_of_type(entries, EntryType.BREAK_END)
        clock_out = _first_of_type(entries, EntryType.CLOCK_OUT)

        if clock_out:
            total = elapsed_ms(clock_in.timestamp, clock_out.timestamp)
            if break_start and break_end:
                total -= elapsed_ms(break_start.timestamp, break_end.timestamp)
        elif break_start:
            total = elapsed_ms(clock_in.timestamp, break_start.timestamp)
            if break_end:
                # back from the break: morning plus the running afternoon
                total += elapsed_ms(break_end.timestamp, self.now())
        else:
            total = elapsed_ms(clock_in.timestamp, self.now())

        return max(0, total)

    def calculate_break_duration(self, entries: Iterable[PunchEntry]) -> int:
        entries = list(entries or [])
        break_start = _first_of_type(entries, EntryType.BREAK_START)
        if not break_start:
            return 0
        break_end = _first_of_type(entries, EntryType.BREAK_END)
        end = break_end.timestamp if break_end else self.now()
        return max(0, elapsed_ms(break_start.timestamp, end))

    def get_day_status(self, entries: Iterable[PunchEntry]) -> DayStatus:
        present = {e.entry_type for e in entries or []}
        if EntryType.CLOCK_OUT in present:
            return DayStatus.COMPLETED
        if EntryType.BREAK_END in present:
            return DayStatus.AFTERNOON
        if EntryType.BREAK_START in present:
            return DayStatus.LUNCH
        if EntryType.CLOCK_IN in present:
            return DayStatus.MORNING
        return DayStatus.NOT_STARTED

    def get_next_expected_entry(self, entries: Iterable[PunchEntry]) -> Optional[EntryType]:
        return NEXT_ENTRY_BY_STATUS[self.get_day_status(entries)]

    # ----------------------
    # Daily target
    # ----------------------

    def get_remaining_time(self, duration: int) -> int:
        return max(0, self._target_ms - duration)

    def is_work_day_complete(self, duration: int) -> bool:
        return duration >= self._target_ms

    def get_completion_percentage(self, duration: int) -> int:
        """Share of the daily target reached; not capped, overtime shows above 100."""
        return round_half_up(duration / self._target_ms * 100)

    # ----------------------
    # Projects
    # ----------------------

    def calculate_project_time(self, sessions: Iterable[ProjectSession], include_running: bool = True) -> int:
        now = self.now()
        return sum(s.duration(now) for s in sessions or [] if include_running or not s.is_running)

    def calculate_total_project_time(self, sessions: Iterable[ProjectSession]) -> int:
        return self.calculate_project_time(sessions)

    def calculate_project_stats(
        self,
        sessions: Iterable[ProjectSession],
        projects: Iterable[Project],
    ) -> list[ProjectStat]:
        sessions = list(sessions or [])
        if not sessions:
            return []

        now = self.now()
        by_id = index_by_id(projects or [])

        # dicts keep insertion order, so groups come out in encounter order
        groups: dict[str, list[ProjectSession]] = {}
        for s in sessions:
            groups.setdefault(s.project_id, []).append(s)

        total = sum(s.duration(now) for s in sessions)

        stats: list[ProjectStat] = []
        for project_id, group in groups.items():
            project = by_id.get(project_id)
            daily: dict[str, int] = {}
            for s in group:
                daily[s.date] = daily.get(s.date, 0) + s.duration(now)
            duration = sum(daily.values())
            count = len(group)

            stats.append(
                ProjectStat(
                    project_id=project_id,
                    project_name=project.name if project else UNKNOWN_PROJECT_NAME,
                    project_color=project.color if project else DEFAULT_PROJECT_COLOR,
                    duration=duration,
                    percentage=round_half_up(duration / total * 100) if total > 0 else 0,
                    session_count=count,
                    average_session_duration=round_half_up(duration / count),
                    is_running=any(s.is_running for s in group),
                    daily_durations=daily,
                )
            )

        # stable: ties keep encounter order
        return sorted(stats, key=lambda st: st.duration, reverse=True)
