from __future__ import annotations

from typing import Optional

from ..database.bootstrap import KV_TABLE
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bytes, db_cursor, fetchone
from .kv import KeyValueStore


class MySQLKeyValueStore(KeyValueStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[bytes]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT v FROM {KV_TABLE} WHERE k=%s", (key,))
            row = fetchone(cur)
            if not row:
                return None
            return as_bytes(row["v"])

    def set(self, key: str, value: bytes) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO {KV_TABLE}(k, v)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE v=VALUES(v)
                """,
                (key, value),
            )

    def delete(self, key: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {KV_TABLE} WHERE k=%s", (key,))
