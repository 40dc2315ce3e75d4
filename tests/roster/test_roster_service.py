from __future__ import annotations

import pytest

from roster_ledger.attendance.model import AttendanceLedger
from roster_ledger.core.enums import AttendanceStatus
from roster_ledger.core.exceptions import NotFoundError, ValidationError
from roster_ledger.roster.model import Entity
from roster_ledger.roster.service import RosterService
from roster_ledger.storage.state_store import StateStore


def test_add_entity_trims_and_persists(kv, state, id_factory):
    svc = RosterService(state, id_factory=id_factory)

    entity = svc.add_entity(name="  Ann ", roll_label=" 4 ", photo_ref="   ")

    assert entity == Entity("id1", "Ann", "4", None)
    assert StateStore(kv).load().get_roster() == [entity]


def test_add_entity_requires_name_and_roll(state):
    svc = RosterService(state)

    with pytest.raises(ValidationError):
        svc.add_entity(name=" ", roll_label="1")
    with pytest.raises(ValidationError):
        svc.add_entity(name="Ann", roll_label="")
    assert state.get_roster() == []


def test_remove_entity_cascades_into_every_date(kv, state):
    state.save_roster([Entity("a", "Ann", "1"), Entity("b", "Ben", "2")])
    state.save_ledger(
        AttendanceLedger(
            {
                "2026-01-04": {"a": AttendanceStatus.ABSENT, "b": AttendanceStatus.PRESENT},
                "2026-01-05": {"a": AttendanceStatus.PRESENT},
            }
        )
    )
    state.flush()

    RosterService(state).remove_entity("a")

    reloaded = StateStore(kv).load()
    assert [e.entity_id for e in reloaded.get_roster()] == ["b"]
    ledger = reloaded.get_ledger()
    assert all("a" not in ledger.marks_for(day) for day in ledger.dates())
    assert ledger.marks_for("2026-01-04") == {"b": AttendanceStatus.PRESENT}


def test_remove_unknown_entity_raises_not_found(state):
    state.save_roster([Entity("a", "Ann", "1")])

    with pytest.raises(NotFoundError) as exc:
        RosterService(state).remove_entity("zzz")

    assert exc.value.entity_id == "zzz"
    assert len(state.get_roster()) == 1


def test_list_sorted_uses_roll_order(state):
    state.save_roster([Entity("a", "Ann", "10"), Entity("b", "Ben", "2")])

    svc = RosterService(state)

    assert [e.entity_id for e in svc.list_entities()] == ["a", "b"]
    assert [e.entity_id for e in svc.list_sorted()] == ["b", "a"]
