"""Write a backup of the configured store into `backups/`."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from roster_ledger.container import build_container
from roster_ledger.main import load_settings


def main() -> None:
    settings = load_settings()
    container = build_container(settings=settings)
    container.state.load()

    out_dir = Path(__file__).resolve().parents[1] / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"attendance_backup_{ts}.json"
    out_file.write_text(container.backup_service.export_backup(), encoding="utf-8")
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
