from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..attendance.model import AttendanceLedger
from ..roster.model import Entity


class StateRepository(Protocol):
    """Interface the services depend on.

    Note (DIP): services never talk to a concrete key-value backend.
    Writes are buffered until `flush()`.
    """

    def get_roster(self) -> list[Entity]:
        raise NotImplementedError

    def save_roster(self, entities: Sequence[Entity]) -> None:
        raise NotImplementedError

    def get_ledger(self) -> AttendanceLedger:
        raise NotImplementedError

    def save_ledger(self, ledger: AttendanceLedger) -> None:
        raise NotImplementedError

    def get_selected_date(self) -> str:
        raise NotImplementedError

    def save_selected_date(self, selected_date: str) -> None:
        raise NotImplementedError

    def get_schema_version(self) -> Optional[str]:
        raise NotImplementedError

    def save_schema_version(self, version: str) -> None:
        raise NotImplementedError

    def flush(self) -> list[str]:
        raise NotImplementedError
