from __future__ import annotations

import json

import pytest

from roster_ledger.attendance.model import AttendanceLedger
from roster_ledger.backup.codec import BackupCodec
from roster_ledger.core.enums import AttendanceStatus, BackupErrorKind
from roster_ledger.roster.model import Entity


@pytest.fixture
def codec():
    return BackupCodec()


def test_export_is_self_describing(codec, fixed_now):
    roster = [Entity("a", "Ann", "1", "p.png"), Entity("b", "Ben", "2")]
    ledger = AttendanceLedger({"2026-01-05": {"a": AttendanceStatus.PRESENT}})

    payload = json.loads(codec.export(roster, ledger, "2026-01-05", now=fixed_now))

    assert payload == {
        "version": 1,
        "exportedAt": "2026-01-05T08:30:00+00:00",
        "roster": [
            {"id": "a", "name": "Ann", "rollLabel": "1", "photoRef": "p.png"},
            {"id": "b", "name": "Ben", "rollLabel": "2"},
        ],
        "ledger": {"2026-01-05": {"a": "present"}},
        "selectedDate": "2026-01-05",
    }


def test_export_then_parse_reproduces_state(codec):
    roster = [Entity("a", "Ann", "1"), Entity("b", "Bén", "2a")]
    ledger = AttendanceLedger({"2026-01-05": {"a": AttendanceStatus.ABSENT}, "2026-01-06": {}})

    result = codec.parse(codec.export(roster, ledger, "2026-01-06"))

    assert result.ok
    assert result.snapshot.roster == roster
    assert result.snapshot.ledger == ledger
    assert result.snapshot.selected_date == "2026-01-06"


@pytest.mark.parametrize(
    "payload, kind",
    [
        ("{not json", BackupErrorKind.MALFORMED),
        ("[" * 100000 + "]" * 100000, BackupErrorKind.MALFORMED),
        (b"\xff\xfe", BackupErrorKind.MALFORMED),
        ("[1, 2]", BackupErrorKind.NOT_AN_OBJECT),
        ("null", BackupErrorKind.NOT_AN_OBJECT),
        ('{"students": []}', BackupErrorKind.MISSING_ROSTER),
        ('{"roster": {}, "ledger": "x"}', BackupErrorKind.MISSING_ROSTER),
        ('{"roster": [], "ledger": []}', BackupErrorKind.MISSING_LEDGER),
        ('{"roster": []}', BackupErrorKind.MISSING_LEDGER),
    ],
)
def test_parse_rejects_with_first_failing_rule(codec, payload, kind):
    result = codec.parse(payload)

    assert not result.ok
    assert result.error == kind
    assert result.snapshot is None


def test_invalid_selected_date_is_not_adopted(codec):
    result = codec.parse('{"roster": [], "ledger": {}, "selectedDate": "yesterday"}')

    assert result.ok
    assert result.snapshot.selected_date is None


def test_unknown_fields_are_ignored_and_entities_not_validated(codec):
    payload = json.dumps(
        {
            "version": 2,
            "theme": "dark",
            "roster": [{"id": "a", "nickname": "x"}, 42],
            "ledger": {},
        }
    )

    result = codec.parse(payload)

    assert result.ok
    assert result.snapshot.roster == [Entity("a", "", "")]
    assert result.snapshot.version == 2
