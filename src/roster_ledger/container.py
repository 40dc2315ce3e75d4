from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

from .attendance.service import AttendanceService
from .backup.service import BackupService
from .core.constants import CURRENT_SCHEMA_VERSION
from .core.enums import StoreBackend
from .database.bootstrap import ensure_schema
from .database.connection import DatabaseConnection, DBConfig
from .reports.service import DailyReportService
from .roster.model import IdFactory, SeedEntry, new_entity_id
from .roster.reconciler import RosterReconciler
from .roster.seed import load_seed
from .roster.service import RosterService
from .storage.kv import FileKeyValueStore, InMemoryKeyValueStore, KeyValueStore
from .storage.mysql_kv_store import MySQLKeyValueStore
from .storage.state_store import StateStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    kv: KeyValueStore
    state: StateStore

    reconciler: RosterReconciler
    roster_service: RosterService
    attendance_service: AttendanceService
    backup_service: BackupService
    report_service: DailyReportService


def build_kv_store(settings: Any) -> KeyValueStore:
    backend = StoreBackend(str(getattr(settings, "STORE_BACKEND", StoreBackend.MEMORY.value)).lower())

    if backend == StoreBackend.FILE:
        return FileKeyValueStore(getattr(settings, "STORE_DIR", "var/store"))

    if backend == StoreBackend.MYSQL:
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            ensure_schema(conn)
        return MySQLKeyValueStore(conn)

    return InMemoryKeyValueStore()


def load_configured_seed(settings: Any) -> list[SeedEntry]:
    seed_path = getattr(settings, "SEED_PATH", None)
    if not seed_path:
        return []
    path = Path(seed_path)
    if not path.exists():
        logger.warning("Seed file %s not found; starting without a seed list", path)
        return []
    return load_seed(path)


def build_container(
    *,
    settings: Any,
    kv: Optional[KeyValueStore] = None,
    seed: Optional[Sequence[SeedEntry]] = None,
    id_factory: IdFactory = new_entity_id,
) -> Container:
    kv = kv if kv is not None else build_kv_store(settings)
    seed = list(seed) if seed is not None else load_configured_seed(settings)

    state = StateStore(kv, namespace=str(getattr(settings, "STORE_NAMESPACE", "") or ""))

    reconciler = RosterReconciler(
        state,
        seed,
        target_version=str(getattr(settings, "SCHEMA_VERSION", CURRENT_SCHEMA_VERSION)),
        id_factory=id_factory,
    )
    roster_service = RosterService(state, id_factory=id_factory)
    attendance_service = AttendanceService(state, roster_service)
    backup_service = BackupService(state)
    report_service = DailyReportService(roster_service, attendance_service)

    return Container(
        kv=kv,
        state=state,
        reconciler=reconciler,
        roster_service=roster_service,
        attendance_service=attendance_service,
        backup_service=backup_service,
        report_service=report_service,
    )
