from __future__ import annotations

import json

from roster_ledger.attendance.model import AttendanceLedger
from roster_ledger.backup.service import BackupService
from roster_ledger.core.enums import AttendanceStatus, BackupErrorKind
from roster_ledger.roster.model import Entity
from roster_ledger.storage.kv import InMemoryKeyValueStore
from roster_ledger.storage.state_store import StateStore


def _seed_state(state):
    state.save_roster([Entity("a", "Ann", "1")])
    state.save_ledger(AttendanceLedger({"2026-01-05": {"a": AttendanceStatus.PRESENT}}))
    state.save_selected_date("2026-01-05")
    state.flush()


def test_rejected_import_leaves_state_untouched(kv, state):
    _seed_state(state)
    before = {k: kv.get(k) for k in kv.keys()}

    result = BackupService(state).import_backup('{"students": []}')

    assert result.error == BackupErrorKind.MISSING_ROSTER
    assert {k: kv.get(k) for k in kv.keys()} == before
    assert state.get_roster() == [Entity("a", "Ann", "1")]


def test_import_replaces_instead_of_merging(kv, state):
    _seed_state(state)
    payload = json.dumps(
        {
            "version": 1,
            "roster": [{"id": "z", "name": "Zoe", "rollLabel": "9"}],
            "ledger": {"2026-02-01": {"z": "absent"}},
            "selectedDate": "2026-02-01",
        }
    )

    result = BackupService(state).import_backup(payload)

    assert result.ok
    reloaded = StateStore(kv).load()
    assert reloaded.get_roster() == [Entity("z", "Zoe", "9")]
    assert reloaded.get_ledger().to_dict() == {"2026-02-01": {"z": "absent"}}
    assert reloaded.get_selected_date() == "2026-02-01"


def test_import_keeps_current_selection_when_payload_date_invalid(state):
    _seed_state(state)

    BackupService(state).import_backup('{"roster": [], "ledger": {}, "selectedDate": 20260201}')

    assert state.get_selected_date() == "2026-01-05"
    assert state.get_roster() == []


def test_round_trip_through_service(state, fixed_now):
    _seed_state(state)
    svc = BackupService(state)
    exported = svc.export_backup(now=fixed_now)

    other = StateStore(InMemoryKeyValueStore(), default_date=lambda: "1999-01-01").load()
    BackupService(other).import_backup(exported)

    assert other.get_roster() == state.get_roster()
    assert other.get_ledger() == state.get_ledger()
    assert other.get_selected_date() == "2026-01-05"
