"""Restore a backup file into the configured store (replaces roster and ledger)."""

from __future__ import annotations

import sys
from pathlib import Path

from roster_ledger.container import build_container
from roster_ledger.main import load_settings


def main(argv: list[str]) -> None:
    if len(argv) != 1:
        raise SystemExit("Usage: python scripts/restore.py <backup.json>")

    settings = load_settings()
    container = build_container(settings=settings)
    container.state.load()

    result = container.backup_service.import_backup(Path(argv[0]).read_bytes())
    if not result.ok:
        raise SystemExit(f"Rejected ({result.error.value}): {result.message}")
    print(f"OK: Restored {len(result.snapshot.roster)} entities from {argv[0]}")


if __name__ == "__main__":
    main(sys.argv[1:])
