from __future__ import annotations

import logging
from typing import Optional

from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError
from ..storage.repository import StateRepository
from .model import Entity, IdFactory, new_entity_id, sort_roster

logger = logging.getLogger(__name__)


class RosterService:
    """Use case: manage roster members (add/remove with ledger cascade)."""

    def __init__(self, state: StateRepository, *, id_factory: IdFactory = new_entity_id):
        self._state = state
        self._id_factory = id_factory

    def list_entities(self) -> list[Entity]:
        return self._state.get_roster()

    def list_sorted(self) -> list[Entity]:
        """Roster in roll order (numeric prefix first)."""
        return sort_roster(self._state.get_roster())

    def get_entity(self, entity_id: str) -> Optional[Entity]:
        for entity in self._state.get_roster():
            if entity.entity_id == entity_id:
                return entity
        return None

    def require_entity(self, entity_id: str) -> Entity:
        entity = self.get_entity(entity_id)
        if entity is None:
            raise NotFoundError(entity_id)
        return entity

    def add_entity(self, *, name: str, roll_label: str, photo_ref: Optional[str] = None) -> Entity:
        name = require_non_empty(name, "Name")
        roll_label = require_non_empty(roll_label, "Roll label")
        photo_ref = photo_ref.strip() if photo_ref and photo_ref.strip() else None

        entity = Entity(entity_id=self._id_factory(), name=name, roll_label=roll_label, photo_ref=photo_ref)
        self._state.save_roster([*self._state.get_roster(), entity])
        self._state.flush()

        logger.info("Added entity %s (%s)", entity.entity_id, entity.roll_label)
        return entity

    def remove_entity(self, entity_id: str) -> Entity:
        """Remove an entity and every ledger mark that references it."""
        entity = self.require_entity(entity_id)

        ledger = self._state.get_ledger()
        cleared = ledger.clear_entity(entity_id)

        self._state.save_roster([e for e in self._state.get_roster() if e.entity_id != entity_id])
        self._state.save_ledger(ledger)
        self._state.flush()

        logger.info("Removed entity %s and %d ledger marks", entity_id, cleared)
        return entity
