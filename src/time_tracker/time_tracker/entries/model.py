from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Iterable, Optional

from ..common.datetime_utils import format_date, parse_iso_datetime
from ..common.validators import require_not_future
from ..core.enums import EntryType
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class PunchEntry:
    """Domain entity: a single timestamped punch (arrival, break, departure)."""

    entry_id: str
    entry_type: EntryType
    timestamp: datetime
    date: str
    note: Optional[str] = None

    @classmethod
    def create(
        cls,
        entry_type: EntryType | str,
        timestamp: datetime,
        *,
        now: datetime,
        note: Optional[str] = None,
        entry_id: Optional[str] = None,
    ) -> "PunchEntry":
        kind = parse_entry_type(entry_type)
        require_not_future(timestamp, "timestamp", now=now)
        return cls(
            entry_id=entry_id or str(uuid.uuid4()),
            entry_type=kind,
            timestamp=timestamp,
            date=format_date(timestamp),
            note=note,
        )

    def with_timestamp(self, timestamp: datetime) -> "PunchEntry":
        return replace(self, timestamp=timestamp, date=format_date(timestamp))

    def to_dict(self) -> dict:
        return {
            "id": self.entry_id,
            "type": self.entry_type.value,
            "timestamp": self.timestamp.isoformat(),
            "date": self.date,
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, data: Any, *, now: datetime) -> "PunchEntry":
        if not isinstance(data, dict):
            raise ValidationError("Entry must be an object")
        if not data.get("timestamp"):
            raise ValidationError("timestamp is required")
        return cls.create(
            data.get("type"),
            parse_iso_datetime(data["timestamp"]),
            now=now,
            note=data.get("note"),
            entry_id=data.get("id"),
        )


# Older stored data named the break punches after lunch
LEGACY_ENTRY_TYPES = {
    "lunch-start": EntryType.BREAK_START,
    "lunch-end": EntryType.BREAK_END,
}


def parse_entry_type(value: EntryType | str | None) -> EntryType:
    if isinstance(value, EntryType):
        return value
    if not value:
        raise ValidationError("Entry type is required")
    if isinstance(value, str) and value in LEGACY_ENTRY_TYPES:
        return LEGACY_ENTRY_TYPES[value]
    try:
        return EntryType(value)
    except ValueError:
        valid = ", ".join(t.value for t in EntryType)
        raise ValidationError(f"Invalid entry type: {value}. Valid types: {valid}") from None


def filter_by_date(date: str, entries: Iterable[PunchEntry]) -> list[PunchEntry]:
    return [e for e in entries if e.date == date]


def sort_by_timestamp(entries: Iterable[PunchEntry]) -> list[PunchEntry]:
    return sorted(entries, key=lambda e: e.timestamp)
