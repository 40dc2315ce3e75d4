from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from ..attendance.model import AttendanceLedger
from ..common.datetime_utils import is_iso_date, now_utc, to_iso_date
from ..core.constants import BACKUP_FORMAT_VERSION
from ..core.enums import BackupErrorKind
from ..roster.model import Entity
from .model import BackupSnapshot, ImportResult

logger = logging.getLogger(__name__)


class BackupCodec:
    """Self-describing JSON snapshot of roster, ledger and selected date.

    `parse` checks structure only, in a fixed order, and reports the first
    failure as a value. Entity shapes are not validated; unknown top-level
    fields are ignored.
    """

    def export(
        self,
        roster: Sequence[Entity],
        ledger: AttendanceLedger,
        selected_date: str,
        *,
        now: Optional[datetime] = None,
    ) -> str:
        payload = {
            "version": BACKUP_FORMAT_VERSION,
            "exportedAt": (now or now_utc()).isoformat(),
            "roster": [e.to_dict() for e in roster],
            "ledger": ledger.to_dict(),
            "selectedDate": selected_date,
        }
        return json.dumps(payload, indent=2, ensure_ascii=False)

    def parse(self, payload: str | bytes) -> ImportResult:
        try:
            data: Any = json.loads(payload)
        except (TypeError, ValueError, RecursionError) as exc:
            return ImportResult.failure(BackupErrorKind.MALFORMED, f"Invalid file: {exc}")

        if not isinstance(data, dict):
            return ImportResult.failure(BackupErrorKind.NOT_AN_OBJECT, "Invalid file")

        roster = data.get("roster")
        if not isinstance(roster, list):
            return ImportResult.failure(BackupErrorKind.MISSING_ROSTER, "Missing roster")

        ledger = data.get("ledger")
        if not isinstance(ledger, dict):
            return ImportResult.failure(BackupErrorKind.MISSING_LEDGER, "Missing ledger")

        version = data.get("version")
        if isinstance(version, int) and version > BACKUP_FORMAT_VERSION:
            logger.warning("Backup format %s is newer than %s; reading known fields only", version, BACKUP_FORMAT_VERSION)

        selected = data.get("selectedDate")
        exported_at = data.get("exportedAt")
        return ImportResult.success(
            BackupSnapshot(
                roster=[Entity.from_dict(e) for e in roster if isinstance(e, dict)],
                ledger=AttendanceLedger.from_dict(ledger),
                selected_date=to_iso_date(selected) if is_iso_date(selected) else None,
                version=version if isinstance(version, int) else None,
                exported_at=exported_at if isinstance(exported_at, str) else None,
            )
        )
