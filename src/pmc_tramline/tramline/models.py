from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime


def _date_str(value: object) -> str | None:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, str) and value:
        return value
    return None


@dataclass(frozen=True, slots=True)
class ActivityRecord:
    """One recorded status change for an entity.

    Dates are raw ISO-8601 strings; formatting them is the renderer's job.
    """

    status: str
    date: str | None = None
    warnings: tuple[str, ...] = ()

    @staticmethod
    def from_json(obj: Mapping[str, object]) -> ActivityRecord:
        """Accept `{status, date}` or an activity-log row `{status, date_created}`."""

        status = obj.get("status")
        if not isinstance(status, str):
            raise ValueError(f"Activity record requires a string status: {dict(obj)!r}")

        date = _date_str(obj.get("date"))
        if date is None:
            date = _date_str(obj.get("date_created"))

        warnings_raw = obj.get("warnings")
        warnings: tuple[str, ...] = ()
        if isinstance(warnings_raw, list):
            warnings = tuple(w for w in warnings_raw if isinstance(w, str))
        return ActivityRecord(status=status, date=date, warnings=warnings)


def activities_from_log(rows: Iterable[Mapping[str, object]]) -> list[ActivityRecord]:
    """Convert status-change log rows to activity records.

    Rows without a status are skipped. Rows must already be sorted by
    creation time, ascending.
    """

    out: list[ActivityRecord] = []
    for row in rows:
        status = row.get("status")
        if not isinstance(status, str) or not status.strip():
            continue
        out.append(ActivityRecord.from_json(row))
    return out


def find_activity(activities: Iterable[ActivityRecord], status: str) -> ActivityRecord | None:
    """First activity with the given status, in chronological order."""

    return next((a for a in activities if a.status == status), None)


@dataclass(frozen=True, slots=True)
class TramStop:
    title: str
    status: str
    completed: bool
    error: bool
    warning: bool
    subtitle: str | None = None

    def to_json(self) -> dict[str, object]:
        out: dict[str, object] = {
            "title": self.title,
            "status": self.status,
            "completed": self.completed,
            "error": self.error,
            "warning": self.warning,
        }
        if self.subtitle is not None:
            out["subtitle"] = self.subtitle
        return out


@dataclass(frozen=True, slots=True)
class TramlineResult:
    tramline: list[TramStop] = field(default_factory=list)
    ended: bool = False

    def to_json(self) -> dict[str, object]:
        return {"tramline": [stop.to_json() for stop in self.tramline], "ended": self.ended}
