from __future__ import annotations

import re
import sys
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

_DIGITS = re.compile(r"\d+")

# Rank given to roll labels without any digit so they sort after numeric ones.
NON_NUMERIC_RANK = sys.maxsize

IdFactory = Callable[[], str]


def new_entity_id() -> str:
    return uuid.uuid4().hex


def normalize_name(name: str) -> str:
    """Matching key used to join roster entries with seed entries."""
    return name.strip().casefold()


def roll_sort_key(roll_label: str) -> tuple[int, str]:
    """Order by the first digit run of the label, then by the raw label.

    "1" < "2" < "9a" < "10" < "A" (no digits).
    """
    match = _DIGITS.search(roll_label or "")
    rank = int(match.group(0)) if match else NON_NUMERIC_RANK
    return rank, roll_label or ""


@dataclass(frozen=True)
class Entity:
    """Domain entity: one roster member.

    `entity_id` is minted once and never reused. `name` and `roll_label` only
    change through reconciliation; `photo_ref` is an opaque reference.
    """

    entity_id: str
    name: str
    roll_label: str
    photo_ref: Optional[str] = None

    @property
    def match_key(self) -> str:
        return normalize_name(self.name)

    def with_roll_label(self, roll_label: str) -> "Entity":
        return Entity(
            entity_id=self.entity_id,
            name=self.name,
            roll_label=roll_label,
            photo_ref=self.photo_ref,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.entity_id,
            "name": self.name,
            "rollLabel": self.roll_label,
        }
        if self.photo_ref is not None:
            data["photoRef"] = self.photo_ref
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Entity":
        """Lenient decoding: missing fields become empty strings.

        Older payloads used `rollNumber`/`photo`; both spellings are read.
        """
        roll = data.get("rollLabel", data.get("rollNumber", ""))
        photo = data.get("photoRef", data.get("photo"))
        return cls(
            entity_id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            roll_label=str(roll if roll is not None else ""),
            photo_ref=str(photo) if photo else None,
        )


@dataclass(frozen=True)
class SeedEntry:
    """Authoritative definition of someone who should be on the roster."""

    name: str
    roll_label: str

    @property
    def match_key(self) -> str:
        return normalize_name(self.name)

    def to_entity(self, entity_id: str) -> Entity:
        return Entity(entity_id=entity_id, name=self.name, roll_label=self.roll_label)


def sort_roster(entities) -> list[Entity]:
    return sorted(entities, key=lambda e: roll_sort_key(e.roll_label))
