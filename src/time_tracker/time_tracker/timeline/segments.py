"""Day timeline: break pairing, segment classification and project overlap.

Kept apart from the presence calculator. These functions take `now`
explicitly and only use it to close a break or session that is still open.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from ..common.datetime_utils import elapsed_ms
from ..core.constants import UNKNOWN_PROJECT_NAME
from ..core.enums import EntryType, SegmentType
from ..entries.model import PunchEntry, sort_by_timestamp
from ..projects.model import Project, index_by_id
from ..sessions.model import ProjectSession

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BreakPair:
    start: datetime
    end: Optional[datetime]


@dataclass(frozen=True)
class TimelineSegment:
    segment_type: SegmentType
    start: datetime
    end: datetime
    label: str
    project_ids: tuple[str, ...] = ()

    @property
    def duration(self) -> int:
        return elapsed_ms(self.start, self.end)

    def to_dict(self) -> dict:
        return {
            "type": self.segment_type.value,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "label": self.label,
            "project_ids": list(self.project_ids),
            "duration": self.duration,
        }


@dataclass(frozen=True)
class _Interval:
    start: datetime
    end: datetime
    project_id: str


def get_break_pairs(entries: Iterable[PunchEntry]) -> list[BreakPair]:
    """Pair each break start with the following break end, in time order.

    A start followed by another start, or left unmatched at the end of the
    day, becomes an open pair (end=None). Stray break ends are ignored.
    """
    pairs: list[BreakPair] = []
    current: Optional[datetime] = None
    for e in sort_by_timestamp(entries):
        if e.entry_type == EntryType.BREAK_START:
            if current is not None:
                pairs.append(BreakPair(start=current, end=None))
            current = e.timestamp
        elif e.entry_type == EntryType.BREAK_END and current is not None:
            pairs.append(BreakPair(start=current, end=e.timestamp))
            current = None
    if current is not None:
        pairs.append(BreakPair(start=current, end=None))
    return pairs


def _session_intervals(sessions: Iterable[ProjectSession], now: datetime) -> list[_Interval]:
    out = []
    for s in sessions:
        end = s.end_time if s.end_time is not None else now
        if end > s.start_time:
            out.append(_Interval(start=s.start_time, end=end, project_id=s.project_id))
    return out


def _active_projects(intervals: list[_Interval], start: datetime, end: datetime) -> tuple[str, ...]:
    ids: list[str] = []
    for iv in intervals:
        if iv.start <= start and end <= iv.end and iv.project_id not in ids:
            ids.append(iv.project_id)
    return tuple(ids)


def _slices(points: Iterable[datetime]):
    ordered = sorted(set(points))
    return zip(ordered, ordered[1:])


def calculate_overlap_time(sessions: Iterable[ProjectSession], *, now: datetime) -> int:
    """Wall-clock ms during which two or more distinct projects run at once.

    Each instant is counted once, however many sessions cover it.
    """
    intervals = _session_intervals(sessions, now)
    points = [p for iv in intervals for p in (iv.start, iv.end)]

    total = 0
    for a, b in _slices(points):
        if len(_active_projects(intervals, a, b)) >= 2:
            total += elapsed_ms(a, b)
    return total


def _label(segment_type: SegmentType, project_ids: tuple[str, ...], projects: dict[str, Project]) -> str:
    if segment_type == SegmentType.BREAK:
        return "Break"
    if segment_type == SegmentType.IDLE:
        return "Idle"
    if segment_type == SegmentType.PROJECT:
        project = projects.get(project_ids[0])
        return project.name if project else UNKNOWN_PROJECT_NAME
    return f"{len(project_ids)} projects"


def _merge_adjacent(segments: list[TimelineSegment]) -> list[TimelineSegment]:
    merged: list[TimelineSegment] = []
    for seg in segments:
        prev = merged[-1] if merged else None
        if (
            prev is not None
            and prev.end == seg.start
            and prev.segment_type == seg.segment_type
            and prev.project_ids == seg.project_ids
        ):
            merged[-1] = TimelineSegment(
                segment_type=prev.segment_type,
                start=prev.start,
                end=seg.end,
                label=prev.label,
                project_ids=prev.project_ids,
            )
        else:
            merged.append(seg)
    return merged


def build_day_segments(
    entries: Iterable[PunchEntry],
    sessions: Iterable[ProjectSession],
    projects: Iterable[Project],
    *,
    now: datetime,
) -> list[TimelineSegment]:
    """Slice the working day into break / idle / project / multi-project segments.

    The day runs from the first clock-in to the clock-out, or to `now` while
    it is still open. Nothing is returned before a clock-in.
    """
    entries = sort_by_timestamp(entries or [])
    clock_in = next((e for e in entries if e.entry_type == EntryType.CLOCK_IN), None)
    if clock_in is None:
        return []
    clock_out = next((e for e in entries if e.entry_type == EntryType.CLOCK_OUT), None)

    day_start = clock_in.timestamp
    day_end = clock_out.timestamp if clock_out else now
    if day_end <= day_start:
        return []

    def clip(t: datetime) -> datetime:
        return min(max(t, day_start), day_end)

    breaks = [
        (clip(p.start), clip(p.end if p.end is not None else now))
        for p in get_break_pairs(entries)
    ]
    breaks = [(a, b) for a, b in breaks if b > a]

    intervals = [
        _Interval(start=clip(iv.start), end=clip(iv.end), project_id=iv.project_id)
        for iv in _session_intervals(sessions or [], now)
    ]
    intervals = [iv for iv in intervals if iv.end > iv.start]

    points = [day_start, day_end]
    points += [t for b in breaks for t in b]
    points += [t for iv in intervals for t in (iv.start, iv.end)]

    by_id = index_by_id(projects or [])
    raw: list[TimelineSegment] = []
    for a, b in _slices(points):
        if any(bs <= a and b <= be for bs, be in breaks):
            seg_type, ids = SegmentType.BREAK, ()
        else:
            ids = _active_projects(intervals, a, b)
            if not ids:
                seg_type = SegmentType.IDLE
            elif len(ids) == 1:
                seg_type = SegmentType.PROJECT
            else:
                seg_type = SegmentType.MULTI_PROJECT
        raw.append(TimelineSegment(seg_type, a, b, _label(seg_type, ids, by_id), ids))

    segments = _merge_adjacent(raw)
    log.debug("timeline %s: %d slices merged into %d segments", clock_in.date, len(raw), len(segments))
    return segments
