from __future__ import annotations

import importlib

from config import get_settings_module

from roster_ledger.database.bootstrap import ensure_schema, list_tables
from roster_ledger.database.connection import DatabaseConnection, DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_dict(dict(settings.DB_CONFIG))

    conn = DatabaseConnection.get_instance(config)
    ensure_schema(conn)
    tables = list_tables(conn)
    print(
        "OK: Key-value table ready -> "
        f"{config.user}@{config.host}:{config.port}/{config.database} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
