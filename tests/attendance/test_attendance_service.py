from __future__ import annotations

from datetime import date

import pytest

from roster_ledger.attendance.service import AttendanceService
from roster_ledger.core.enums import AttendanceStatus
from roster_ledger.core.exceptions import NotFoundError, ValidationError
from roster_ledger.roster.model import Entity
from roster_ledger.roster.service import RosterService
from roster_ledger.storage.state_store import StateStore


@pytest.fixture
def roster(state):
    state.save_roster([Entity("a", "Ann", "1"), Entity("b", "Ben", "2"), Entity("c", "Cat", "3")])
    state.flush()
    return RosterService(state)


@pytest.fixture
def svc(state, roster):
    return AttendanceService(state, roster)


def test_mark_persists_and_accepts_date_objects(kv, svc):
    svc.mark(date(2026, 1, 5), "a", "present")

    assert StateStore(kv).load().get_ledger().status_of("2026-01-05", "a") == AttendanceStatus.PRESENT
    assert svc.status_of("2026-01-05", "a") == AttendanceStatus.PRESENT


def test_mark_unknown_entity_never_creates_it(svc, state):
    with pytest.raises(NotFoundError):
        svc.mark("2026-01-05", "ghost", AttendanceStatus.ABSENT)

    assert svc.marks_for("2026-01-05") == {}
    assert len(state.get_roster()) == 3


def test_mark_rejects_bad_date_and_status(svc):
    with pytest.raises(ValidationError):
        svc.mark("05/01/2026", "a", "present")
    with pytest.raises(ValidationError):
        svc.mark("2026-01-05", "a", "late")


def test_stats_follow_roster_removal_without_touching_other_marks(svc, roster):
    svc.mark("2026-01-04", "a", "present")
    svc.mark("2026-01-04", "b", "absent")
    assert svc.stats_for_date("2026-01-04").to_dict() == {"total": 3, "present": 1, "absent": 1, "pending": 1}

    roster.remove_entity("c")

    assert svc.stats_for_date("2026-01-04").to_dict() == {"total": 2, "present": 1, "absent": 1, "pending": 0}


def test_unmark_restores_unmarked_state(svc):
    svc.mark("2026-01-05", "b", "absent")

    assert svc.unmark("2026-01-05", "b") is True
    assert svc.unmark("2026-01-05", "b") is False
    assert svc.status_of("2026-01-05", "b") is None


def test_next_unmarked_searches_forward_then_wraps(svc):
    svc.mark("2026-01-05", "b", "present")

    assert svc.next_unmarked("2026-01-05").entity_id == "a"
    assert svc.next_unmarked("2026-01-05", after_id="a").entity_id == "c"
    assert svc.next_unmarked("2026-01-05", after_id="c").entity_id == "a"

    svc.mark("2026-01-05", "a", "present")
    svc.mark("2026-01-05", "c", "absent")
    assert svc.next_unmarked("2026-01-05") is None


def test_selected_date_defaults_and_updates(kv, svc):
    assert svc.get_selected_date() == "2026-01-05"

    assert svc.set_selected_date("2026-02-01") == "2026-02-01"
    assert StateStore(kv).load().get_selected_date() == "2026-02-01"

    with pytest.raises(ValidationError):
        svc.set_selected_date("tomorrow")
