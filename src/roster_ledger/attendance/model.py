from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping, Optional

from ..core.enums import AttendanceStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayStats:
    """Aggregate counts for one date against the live roster."""

    total: int
    present: int
    absent: int
    pending: int

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "present": self.present,
            "absent": self.absent,
            "pending": self.pending,
        }


class AttendanceLedger:
    """Date -> entity id -> status.

    A missing entity key means "unmarked". A date with no sub-map behaves
    exactly like one with an empty sub-map. Marks carry no history: the last
    write wins.
    """

    def __init__(self, days: Optional[Mapping[str, Mapping[str, AttendanceStatus]]] = None):
        self._days: dict[str, dict[str, AttendanceStatus]] = {
            day: dict(marks) for day, marks in (days or {}).items()
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttendanceLedger):
            return NotImplemented
        return self._days == other._days

    def __repr__(self) -> str:
        return f"AttendanceLedger({self._days!r})"

    def __contains__(self, work_date: object) -> bool:
        return work_date in self._days

    def dates(self) -> Iterator[str]:
        return iter(self._days)

    def marks_for(self, work_date: str) -> dict[str, AttendanceStatus]:
        """Copy of one date's sub-map (empty when nothing was recorded)."""
        return dict(self._days.get(work_date, {}))

    def copy(self) -> "AttendanceLedger":
        return AttendanceLedger(self._days)

    def set_status(self, work_date: str, entity_id: str, status: AttendanceStatus) -> None:
        self._days.setdefault(work_date, {})[entity_id] = status

    def status_of(self, work_date: str, entity_id: str) -> Optional[AttendanceStatus]:
        return self._days.get(work_date, {}).get(entity_id)

    def clear_status(self, work_date: str, entity_id: str) -> bool:
        marks = self._days.get(work_date)
        if not marks or entity_id not in marks:
            return False
        del marks[entity_id]
        return True

    def clear_entity(self, entity_id: str) -> int:
        """Remove an entity from every date; returns how many marks went away."""
        removed = 0
        for marks in self._days.values():
            if marks.pop(entity_id, None) is not None:
                removed += 1
        return removed

    def pruned_to(self, valid_ids: Iterable[str]) -> "AttendanceLedger":
        """New ledger keeping only marks of `valid_ids`. Date keys are kept."""
        keep = set(valid_ids)
        return AttendanceLedger(
            {
                day: {eid: status for eid, status in marks.items() if eid in keep}
                for day, marks in self._days.items()
            }
        )

    def stats_for_date(self, work_date: str, roster_size: int) -> DayStats:
        marks = self._days.get(work_date, {})
        present = sum(1 for s in marks.values() if s == AttendanceStatus.PRESENT)
        absent = sum(1 for s in marks.values() if s == AttendanceStatus.ABSENT)
        return DayStats(
            total=roster_size,
            present=present,
            absent=absent,
            pending=roster_size - (present + absent),
        )

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {
            day: {eid: status.value for eid, status in marks.items()}
            for day, marks in self._days.items()
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AttendanceLedger":
        """Lenient decoding of a stored or imported ledger.

        Dates whose value is not a mapping and marks whose value is not a
        known status are skipped.
        """
        days: dict[str, dict[str, AttendanceStatus]] = {}
        skipped = 0
        for day, marks in data.items():
            if not isinstance(marks, Mapping):
                skipped += 1
                continue
            parsed: dict[str, AttendanceStatus] = {}
            for eid, raw in marks.items():
                try:
                    parsed[str(eid)] = AttendanceStatus(raw)
                except (TypeError, ValueError):
                    skipped += 1
            days[str(day)] = parsed
        if skipped:
            logger.warning("Skipped %d unreadable ledger entries", skipped)
        return cls(days)
