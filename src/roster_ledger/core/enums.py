from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Explicit mark recorded for an entity on a date.

    An entity with no mark is "unmarked"; that state is represented by the
    absence of a key, never by a member of this enum.
    """

    PRESENT = "present"
    ABSENT = "absent"


class BackupErrorKind(str, Enum):
    """Why a backup payload was rejected (checked in this order)."""

    MALFORMED = "MALFORMED"
    NOT_AN_OBJECT = "NOT_AN_OBJECT"
    MISSING_ROSTER = "MISSING_ROSTER"
    MISSING_LEDGER = "MISSING_LEDGER"


class StoreBackend(str, Enum):
    MEMORY = "memory"
    FILE = "file"
    MYSQL = "mysql"
