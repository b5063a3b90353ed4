from __future__ import annotations

from typing import Mapping, Optional

import mysql.connector

from ..core.exceptions import StoreError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import KeyValueStore


class MySQLKeyValueStore(KeyValueStore):
    """Key-value rows in the ``kv_store`` table (see database.bootstrap.KV_SCHEMA)."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[str]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("SELECT v FROM kv_store WHERE k=%s", (key,))
                row = fetchone(cur)
                return row["v"] if row else None
        except mysql.connector.Error as e:
            raise StoreError(f"Cannot read {key!r}: {e}") from e

    def set(self, key: str, value: str) -> None:
        self.set_many({key: value})

    def set_many(self, values: Mapping[str, str]) -> None:
        # db_cursor commits once at the end, so all rows land in one transaction.
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                for key, value in values.items():
                    cur.execute(
                        """
                        INSERT INTO kv_store(k, v) VALUES(%s,%s)
                        ON DUPLICATE KEY UPDATE v=VALUES(v)
                        """,
                        (key, value),
                    )
        except mysql.connector.Error as e:
            raise StoreError(f"Cannot write {sorted(values)}: {e}") from e

    def delete(self, key: str) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM kv_store WHERE k=%s", (key,))
                return cur.rowcount > 0
        except mysql.connector.Error as e:
            raise StoreError(f"Cannot delete {key!r}: {e}") from e
