from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import to_iso_date
from ..common.validators import require_status
from ..core.enums import AttendanceStatus
from ..roster.model import Entity, sort_roster
from ..roster.service import RosterService
from ..storage.repository import StateRepository
from .model import DayStats

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: record and query per-date marks against the live roster."""

    def __init__(self, state: StateRepository, roster: RosterService):
        self._state = state
        self._roster = roster

    def mark(self, work_date: date | str, entity_id: str, status: AttendanceStatus | str) -> AttendanceStatus:
        """Upsert a mark. Unknown entities raise NotFoundError."""
        day = to_iso_date(work_date)
        status = require_status(status)
        self._roster.require_entity(entity_id)

        ledger = self._state.get_ledger()
        ledger.set_status(day, entity_id, status)
        self._state.save_ledger(ledger)
        self._state.flush()

        logger.debug("Marked %s as %s on %s", entity_id, status.value, day)
        return status

    def unmark(self, work_date: date | str, entity_id: str) -> bool:
        """Undo a mark; returns False when there was nothing to undo."""
        day = to_iso_date(work_date)
        self._roster.require_entity(entity_id)

        ledger = self._state.get_ledger()
        if not ledger.clear_status(day, entity_id):
            return False
        self._state.save_ledger(ledger)
        self._state.flush()
        return True

    def status_of(self, work_date: date | str, entity_id: str) -> Optional[AttendanceStatus]:
        return self._state.get_ledger().status_of(to_iso_date(work_date), entity_id)

    def marks_for(self, work_date: date | str) -> dict[str, AttendanceStatus]:
        return self._state.get_ledger().marks_for(to_iso_date(work_date))

    def stats_for_date(self, work_date: date | str) -> DayStats:
        roster_size = len(self._state.get_roster())
        return self._state.get_ledger().stats_for_date(to_iso_date(work_date), roster_size)

    def next_unmarked(self, work_date: date | str, *, after_id: Optional[str] = None) -> Optional[Entity]:
        """First unmarked entity in roll order after `after_id`, wrapping around."""
        marks = self.marks_for(work_date)
        ordered = sort_roster(self._state.get_roster())

        start = 0
        if after_id is not None:
            for idx, entity in enumerate(ordered):
                if entity.entity_id == after_id:
                    start = idx + 1
                    break

        for entity in ordered[start:] + ordered[:start]:
            if entity.entity_id not in marks:
                return entity
        return None

    def get_selected_date(self) -> str:
        return self._state.get_selected_date()

    def set_selected_date(self, value: date | str) -> str:
        day = to_iso_date(value)
        self._state.save_selected_date(day)
        self._state.flush()
        return day
