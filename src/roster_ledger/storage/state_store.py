"""Explicit handle over the persisted roster/ledger state.

Lifecycle: `load()` (load-or-default) -> mutate through `save_*` -> `flush()`.
Keys are flushed in a fixed order with the schema marker last, so a failure
partway through never leaves the marker advanced over a partial write.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional, Sequence

from ..attendance.model import AttendanceLedger
from ..common.datetime_utils import is_iso_date, today_iso
from ..core.constants import (
    KEY_LEDGER,
    KEY_ROSTER,
    KEY_SCHEMA_VERSION,
    KEY_SELECTED_DATE,
    STATE_KEYS,
)
from ..core.exceptions import PersistenceError
from ..roster.model import Entity
from .kv import KeyValueStore
from .repository import StateRepository

logger = logging.getLogger(__name__)


class StateStore(StateRepository):
    def __init__(
        self,
        kv: KeyValueStore,
        *,
        namespace: str = "",
        default_date: Callable[[], str] = today_iso,
    ):
        self._kv = kv
        self._namespace = namespace
        self._default_date = default_date
        self._loaded = False
        self._dirty: set[str] = set()

        self._roster: list[Entity] = []
        self._ledger = AttendanceLedger()
        self._selected_date = ""
        self._schema_version: Optional[str] = None

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}" if self._namespace else key

    def _read(self, key: str) -> Optional[bytes]:
        try:
            return self._kv.get(self._key(key))
        except Exception as exc:
            logger.error("Failed to read %r from store: %s", key, exc)
            raise PersistenceError(f"Failed to read {key!r}", key=key) from exc

    def _write(self, key: str, value: bytes) -> None:
        try:
            self._kv.set(self._key(key), value)
        except Exception as exc:
            logger.error("Failed to write %r to store: %s", key, exc)
            raise PersistenceError(f"Failed to write {key!r}", key=key) from exc

    def _read_json(self, key: str) -> Any:
        raw = self._read(key)
        if raw is None:
            return None
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as exc:
            raise PersistenceError(f"Stored value for {key!r} is unreadable", key=key) from exc

    def load(self) -> "StateStore":
        roster = self._read_json(KEY_ROSTER)
        ledger = self._read_json(KEY_LEDGER)
        selected = self._read_json(KEY_SELECTED_DATE)
        marker = self._read(KEY_SCHEMA_VERSION)

        self._roster = [Entity.from_dict(e) for e in roster if isinstance(e, dict)] if isinstance(roster, list) else []
        self._ledger = AttendanceLedger.from_dict(ledger) if isinstance(ledger, dict) else AttendanceLedger()
        self._selected_date = selected if is_iso_date(selected) else self._default_date()
        self._schema_version = marker.decode("utf-8") if marker is not None else None
        self._dirty.clear()
        self._loaded = True

        logger.debug(
            "Loaded state: %d entities, %d dates, schema=%s",
            len(self._roster),
            sum(1 for _ in self._ledger.dates()),
            self._schema_version,
        )
        return self

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def get_roster(self) -> list[Entity]:
        self._ensure_loaded()
        return list(self._roster)

    def save_roster(self, entities: Sequence[Entity]) -> None:
        self._ensure_loaded()
        self._roster = list(entities)
        self._dirty.add(KEY_ROSTER)

    def get_ledger(self) -> AttendanceLedger:
        self._ensure_loaded()
        return self._ledger.copy()

    def save_ledger(self, ledger: AttendanceLedger) -> None:
        self._ensure_loaded()
        self._ledger = ledger.copy()
        self._dirty.add(KEY_LEDGER)

    def get_selected_date(self) -> str:
        self._ensure_loaded()
        return self._selected_date

    def save_selected_date(self, selected_date: str) -> None:
        self._ensure_loaded()
        self._selected_date = selected_date
        self._dirty.add(KEY_SELECTED_DATE)

    def get_schema_version(self) -> Optional[str]:
        self._ensure_loaded()
        return self._schema_version

    def save_schema_version(self, version: str) -> None:
        self._ensure_loaded()
        self._schema_version = version
        self._dirty.add(KEY_SCHEMA_VERSION)

    def _encode(self, key: str) -> bytes:
        if key == KEY_ROSTER:
            return json.dumps([e.to_dict() for e in self._roster]).encode("utf-8")
        if key == KEY_LEDGER:
            return json.dumps(self._ledger.to_dict()).encode("utf-8")
        if key == KEY_SELECTED_DATE:
            return json.dumps(self._selected_date).encode("utf-8")
        if key == KEY_SCHEMA_VERSION:
            return str(self._schema_version).encode("utf-8")
        raise KeyError(key)

    def flush(self) -> list[str]:
        """Write pending keys in order; returns the keys written."""
        written: list[str] = []
        for key in STATE_KEYS:
            if key not in self._dirty:
                continue
            self._write(key, self._encode(key))
            self._dirty.discard(key)
            written.append(key)
        return written
