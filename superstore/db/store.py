"""Key-value blob storage on SQLite."""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any

from .schema import ensure_schema

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "~/.config/superstore/store.db"

STORAGE_KEYS: dict[str, str] = {
    "employees": "keiths-employees",
    "items": "keiths-inventory-items",
    "waste": "keiths-waste-entries",
    "production": "keiths-production-entries",
    "week_start": "keiths-week-start-stocks",
    "ordered": "keiths-ordered-quantities",
}


class KeyValueStore:
    """Whole-value JSON blobs stored under string keys.

    Reads are tolerant: a missing key or a value that fails to parse
    yields the caller's default.
    """

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH) -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = ensure_schema(self._db_path)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def load(self, key: str, default: Any = None) -> Any:
        """Return the decoded value for ``key``, or ``default``."""
        conn = self._get_conn()
        row = conn.execute(
            "SELECT value FROM kv_store WHERE key = ?", (key,)
        ).fetchone()
        if row is None:
            return default
        try:
            return json.loads(row["value"])
        except (json.JSONDecodeError, TypeError):
            logger.warning("Stored value for %r is not valid JSON; using default", key)
            return default

    def save(self, key: str, value: Any) -> None:
        """Replace the value stored under ``key``."""
        conn = self._get_conn()
        conn.execute(
            """INSERT INTO kv_store (key, value) VALUES (?, ?)
               ON CONFLICT(key) DO UPDATE
               SET value = excluded.value,
                   updated_at = datetime('now', 'localtime')""",
            (key, json.dumps(value, ensure_ascii=False)),
        )
        conn.commit()

    def delete(self, key: str) -> None:
        conn = self._get_conn()
        conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        conn.commit()

    def keys(self) -> list[str]:
        conn = self._get_conn()
        rows = conn.execute("SELECT key FROM kv_store ORDER BY key").fetchall()
        return [r["key"] for r in rows]
