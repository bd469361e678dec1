from __future__ import annotations

import json
import logging

from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetchone
from .store import KeyedStore

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    store_key VARCHAR(64) NOT NULL PRIMARY KEY,
    payload LONGTEXT NOT NULL,
    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP
)
"""


class MySQLKeyedStore(KeyedStore):
    """Each collection is one JSON document, so a save is a single atomic row write."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def ensure_schema(self) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(SCHEMA)

    def load(self, key: str) -> list[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT payload FROM kv_store WHERE store_key=%s", (key,))
            row = fetchone(cur)
        if not row:
            return []
        try:
            items = json.loads(row["payload"])
        except ValueError:
            logger.error("Stored payload for %r is not valid JSON; treating as empty", key)
            return []
        return [item for item in items if isinstance(item, dict)] if isinstance(items, list) else []

    def save(self, key: str, items: list[dict]) -> None:
        payload = json.dumps(list(items))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO kv_store (store_key, payload) VALUES (%s, %s)
                ON DUPLICATE KEY UPDATE payload=VALUES(payload)
                """,
                (key, payload),
            )
