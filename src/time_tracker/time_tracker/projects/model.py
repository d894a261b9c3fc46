from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from ..common.validators import require_max_length, require_non_empty
from ..core.constants import DEFAULT_PROJECT_COLOR, PROJECT_NAME_MAX_LENGTH
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Project:
    """Label for aggregated durations. Owned by the host, only read here."""

    project_id: str
    name: str
    color: str = DEFAULT_PROJECT_COLOR

    @classmethod
    def create(cls, name: str, *, color: Optional[str] = None, project_id: Optional[str] = None) -> "Project":
        name = require_max_length(require_non_empty(name, "Project name"), "Project name", PROJECT_NAME_MAX_LENGTH)
        return cls(
            project_id=project_id or str(uuid.uuid4()),
            name=name,
            color=color or DEFAULT_PROJECT_COLOR,
        )

    def to_dict(self) -> dict:
        return {"id": self.project_id, "name": self.name, "color": self.color}

    @classmethod
    def from_dict(cls, data: Any) -> "Project":
        if not isinstance(data, dict):
            raise ValidationError("Project must be an object")
        return cls.create(
            data.get("name"),
            color=data.get("color"),
            project_id=require_non_empty(data.get("id"), "Project id"),
        )


def index_by_id(projects: Iterable[Project]) -> dict[str, Project]:
    """First project wins when ids repeat."""
    out: dict[str, Project] = {}
    for p in projects:
        out.setdefault(p.project_id, p)
    return out
