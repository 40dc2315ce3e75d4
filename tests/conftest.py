from __future__ import annotations

import itertools
from datetime import datetime, timezone

import pytest

from roster_ledger.storage.kv import InMemoryKeyValueStore
from roster_ledger.storage.state_store import StateStore


class FailingKeyValueStore(InMemoryKeyValueStore):
    """Refuses writes to the keys listed in `fail_on`."""

    def __init__(self, fail_on=()):
        super().__init__()
        self.fail_on = set(fail_on)

    def set(self, key: str, value: bytes) -> None:
        if key in self.fail_on:
            raise OSError(f"disk full while writing {key}")
        super().set(key, value)


@pytest.fixture
def fixed_now():
    return datetime(2026, 1, 5, 8, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"id{next(counter)}"


@pytest.fixture
def failing_kv():
    return FailingKeyValueStore()


@pytest.fixture
def kv():
    return InMemoryKeyValueStore()


@pytest.fixture
def state(kv):
    return StateStore(kv, default_date=lambda: "2026-01-05").load()
