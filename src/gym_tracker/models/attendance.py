"""Attendance records and per-user training types."""

import math
from dataclasses import dataclass
from datetime import date as date_cls
from datetime import datetime, timezone


def parse_date(value: str) -> date_cls:
    """Parse a ``YYYY-MM-DD`` string, raising ValueError on anything else."""
    if not isinstance(value, str) or len(value) != 10:
        raise ValueError(f"Expected a YYYY-MM-DD date, got {value!r}")
    return date_cls.fromisoformat(value)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def as_iso(value) -> str | None:
    """Normalize a stored timestamp (string or datetime) to ISO text."""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, str) and value:
        return value
    return None


def as_number(value) -> float | int | None:
    """Coerce a stored numeric value, treating junk as missing."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        return int(number) if number.is_integer() else number
    return None


@dataclass
class AttendanceRecord:
    """One attended day for a user.

    The document id is the date itself, so a user has at most one record
    per day. The year-month bucket is always derived from ``date``.
    """

    date: str  # YYYY-MM-DD
    timestamp: str | None = None
    training_type_id: str | None = None
    duration_minutes: int | None = None
    notes: str | None = None

    @property
    def year_month(self) -> str:
        return self.date[:7]

    @property
    def has_tracked_duration(self) -> bool:
        return self.duration_minutes is not None and self.duration_minutes > 0

    def to_dict(self) -> dict:
        """Convert to the stored document shape (absent fields as null)."""
        return {
            "date": self.date,
            "timestamp": self.timestamp,
            "trainingTypeId": self.training_type_id,
            "durationMinutes": self.duration_minutes,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AttendanceRecord":
        """Create from a stored document; legacy documents may lack fields."""
        duration = as_number(data.get("durationMinutes"))
        return cls(
            date=data.get("date", ""),
            timestamp=as_iso(data.get("timestamp")),
            training_type_id=data.get("trainingTypeId") or None,
            duration_minutes=math.floor(duration + 0.5) if duration is not None else None,
            notes=data.get("notes") or None,
        )


@dataclass
class TrainingType:
    """A user-defined workout category."""

    id: str
    name: str
    color: str
    icon: str | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage (the id is the document id)."""
        return {
            "name": self.name,
            "color": self.color,
            "icon": self.icon,
        }

    @classmethod
    def from_dict(cls, data: dict, id: str) -> "TrainingType":
        return cls(
            id=id,
            name=data.get("name", ""),
            color=data.get("color", ""),
            icon=data.get("icon") or None,
        )
