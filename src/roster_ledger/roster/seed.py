from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Iterable, Mapping

from ..core.exceptions import ValidationError
from .model import SeedEntry

_NAME_FIELDS = ("name", "full_name")
_ROLL_FIELDS = ("roll_label", "rollLabel", "rollNumber", "roll")


def _pick(row: Mapping[str, Any], fields: Iterable[str]) -> str:
    for field in fields:
        value = row.get(field)
        if value is not None:
            return str(value).strip()
    return ""


def seed_from_rows(rows: Iterable[Mapping[str, Any]]) -> list[SeedEntry]:
    """Build seed entries in order, skipping rows without a name."""
    out: list[SeedEntry] = []
    for row in rows:
        name = _pick(row, _NAME_FIELDS)
        if not name:
            continue
        out.append(SeedEntry(name=name, roll_label=_pick(row, _ROLL_FIELDS)))
    return out


def load_seed(path: str | Path) -> list[SeedEntry]:
    """Read the seed list from a CSV (header: name,roll_label) or JSON file."""
    path = Path(path)
    if path.suffix.lower() == ".json":
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, list):
            raise ValidationError(f"Seed file {path} must contain a list")
        return seed_from_rows(r for r in data if isinstance(r, dict))

    with path.open(newline="", encoding="utf-8-sig") as f:
        return seed_from_rows(csv.DictReader(f))
