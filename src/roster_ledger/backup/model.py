from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..attendance.model import AttendanceLedger
from ..core.enums import BackupErrorKind
from ..roster.model import Entity


@dataclass(frozen=True)
class BackupSnapshot:
    """Decoded backup content. `selected_date` is None when absent or invalid."""

    roster: list[Entity]
    ledger: AttendanceLedger
    selected_date: Optional[str]
    version: Optional[int] = None
    exported_at: Optional[str] = None


@dataclass(frozen=True)
class ImportResult:
    """Either a snapshot or a rejection reason, never both."""

    snapshot: Optional[BackupSnapshot] = None
    error: Optional[BackupErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, snapshot: BackupSnapshot) -> "ImportResult":
        return cls(snapshot=snapshot)

    @classmethod
    def failure(cls, error: BackupErrorKind, message: str) -> "ImportResult":
        return cls(error=error, message=message)
