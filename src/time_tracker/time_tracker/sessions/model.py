from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Iterable, Optional

from ..common.datetime_utils import elapsed_ms, format_date, parse_iso_datetime
from ..common.validators import require_non_empty, require_ordered
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class ProjectSession:
    """Contiguous interval of work on one project; end_time None means still running."""

    session_id: str
    project_id: str
    start_time: datetime
    end_time: Optional[datetime]
    date: str

    @classmethod
    def create(
        cls,
        project_id: str,
        start_time: datetime,
        end_time: Optional[datetime] = None,
        *,
        session_id: Optional[str] = None,
    ) -> "ProjectSession":
        project_id = require_non_empty(project_id, "project_id")
        require_ordered(start_time, end_time)
        return cls(
            session_id=session_id or str(uuid.uuid4()),
            project_id=project_id,
            start_time=start_time,
            end_time=end_time,
            date=format_date(start_time),
        )

    @property
    def is_running(self) -> bool:
        return self.end_time is None

    def duration(self, now: datetime) -> int:
        """Duration in ms; an open session is measured up to `now` on every call."""
        end = self.end_time if self.end_time is not None else now
        return elapsed_ms(self.start_time, end)

    def stop(self, end_time: datetime) -> "ProjectSession":
        if not self.is_running:
            raise ValidationError("Session is already stopped")
        require_ordered(self.start_time, end_time)
        return replace(self, end_time=end_time)

    def to_dict(self) -> dict:
        return {
            "id": self.session_id,
            "project_id": self.project_id,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "date": self.date,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ProjectSession":
        if not isinstance(data, dict):
            raise ValidationError("Session must be an object")
        if not data.get("start_time"):
            raise ValidationError("start_time is required")
        end_raw = data.get("end_time")
        return cls.create(
            data.get("project_id"),
            parse_iso_datetime(data["start_time"]),
            parse_iso_datetime(end_raw) if end_raw else None,
            session_id=data.get("id"),
        )


def filter_by_date(date: str, sessions: Iterable[ProjectSession]) -> list[ProjectSession]:
    return [s for s in sessions if s.date == date]
