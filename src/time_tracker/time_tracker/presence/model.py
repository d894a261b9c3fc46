from __future__ import annotations

from dataclasses import asdict, dataclass, field


@dataclass(frozen=True)
class ProjectStat:
    """Read-model: time spent on one project over a set of sessions."""

    project_id: str
    project_name: str
    project_color: str
    duration: int
    percentage: int
    session_count: int
    average_session_duration: int
    is_running: bool
    daily_durations: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)
