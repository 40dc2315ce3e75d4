"""Align the persisted roster with the authoritative seed list.

Runs once per schema version bump. Names (trimmed, case-folded) are the join
key; roll labels follow the seed. Two people whose names normalize to the same
key collide, and that is kept as is.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..attendance.model import AttendanceLedger
from ..core.constants import CURRENT_SCHEMA_VERSION
from ..storage.repository import StateRepository
from .model import Entity, IdFactory, SeedEntry, new_entity_id, normalize_name, sort_roster

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconcileResult:
    roster: list[Entity]
    ledger: AttendanceLedger
    schema_version: Optional[str]
    applied: bool
    seeded: bool = False
    dropped_ids: tuple[str, ...] = ()
    added: tuple[Entity, ...] = ()
    ledger_pruned: bool = False


def reconcile(
    roster: Sequence[Entity],
    ledger: AttendanceLedger,
    schema_version: Optional[str],
    seed: Sequence[SeedEntry],
    *,
    target_version: str = CURRENT_SCHEMA_VERSION,
    id_factory: IdFactory = new_entity_id,
) -> ReconcileResult:
    """Pure reconciliation step; persistence is left to the caller."""

    if not roster and seed:
        seeded = [entry.to_entity(id_factory()) for entry in seed]
        return ReconcileResult(
            roster=seeded,
            ledger=ledger,
            schema_version=target_version,
            applied=True,
            seeded=True,
            added=tuple(seeded),
        )

    if schema_version == target_version:
        return ReconcileResult(roster=list(roster), ledger=ledger, schema_version=schema_version, applied=False)

    # Last duplicate wins.
    roll_by_name = {entry.match_key: entry.roll_label for entry in seed}

    retained = [
        entity.with_roll_label(roll_by_name[entity.match_key])
        for entity in roster
        if entity.match_key in roll_by_name
    ]
    retained_ids = {entity.entity_id for entity in retained}
    dropped_ids = tuple(e.entity_id for e in roster if e.entity_id not in retained_ids)

    retained_names = {entity.match_key for entity in retained}
    added = tuple(
        entry.to_entity(id_factory())
        for entry in seed
        if normalize_name(entry.name) not in retained_names
    )

    # A size change also covers ledger ids that never had a roster entry.
    pruned = bool(dropped_ids) or len(retained) + len(added) != len(roster)
    new_ledger = ledger.pruned_to(retained_ids) if pruned else ledger

    return ReconcileResult(
        roster=sort_roster([*retained, *added]),
        ledger=new_ledger,
        schema_version=target_version,
        applied=True,
        dropped_ids=dropped_ids,
        added=added,
        ledger_pruned=pruned,
    )


class RosterReconciler:
    """Use case: run reconciliation against the persisted state."""

    def __init__(
        self,
        state: StateRepository,
        seed: Sequence[SeedEntry],
        *,
        target_version: str = CURRENT_SCHEMA_VERSION,
        id_factory: IdFactory = new_entity_id,
    ):
        self._state = state
        self._seed = list(seed)
        self._target_version = str(target_version)
        self._id_factory = id_factory

    @property
    def target_version(self) -> str:
        return self._target_version

    def run(self) -> ReconcileResult:
        result = reconcile(
            self._state.get_roster(),
            self._state.get_ledger(),
            self._state.get_schema_version(),
            self._seed,
            target_version=self._target_version,
            id_factory=self._id_factory,
        )
        if not result.applied:
            logger.debug("Roster already at schema %s", self._target_version)
            return result

        self._state.save_roster(result.roster)
        if result.ledger_pruned:
            self._state.save_ledger(result.ledger)
        self._state.save_schema_version(self._target_version)
        self._state.flush()

        if result.seeded:
            logger.info("Seeded roster with %d entities", len(result.roster))
        else:
            logger.info(
                "Reconciled roster to schema %s: %d kept, %d dropped, %d added, ledger pruned=%s",
                self._target_version,
                len(result.roster) - len(result.added),
                len(result.dropped_ids),
                len(result.added),
                result.ledger_pruned,
            )
        return result
