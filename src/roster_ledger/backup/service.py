from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..storage.repository import StateRepository
from .codec import BackupCodec
from .model import ImportResult

logger = logging.getLogger(__name__)


class BackupService:
    """Use case: export the whole state and restore it all-or-nothing."""

    def __init__(self, state: StateRepository, *, codec: Optional[BackupCodec] = None):
        self._state = state
        self._codec = codec or BackupCodec()

    def export_backup(self, *, now: Optional[datetime] = None) -> str:
        return self._codec.export(
            self._state.get_roster(),
            self._state.get_ledger(),
            self._state.get_selected_date(),
            now=now,
        )

    def import_backup(self, payload: str | bytes) -> ImportResult:
        """Replace roster and ledger with the payload's content.

        Nothing is written unless the payload passes validation. The selected
        date is only replaced when the payload carries a valid one.
        """
        result = self._codec.parse(payload)
        if not result.ok:
            logger.warning("Backup rejected (%s): %s", result.error.value, result.message)
            return result

        snapshot = result.snapshot
        self._state.save_roster(snapshot.roster)
        self._state.save_ledger(snapshot.ledger)
        if snapshot.selected_date is not None:
            self._state.save_selected_date(snapshot.selected_date)
        self._state.flush()

        logger.info("Backup restored: %d entities", len(snapshot.roster))
        return result
