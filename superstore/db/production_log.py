"""Production sheet storage."""

from __future__ import annotations

import logging
from pathlib import Path

from ..models import ProductionEntry
from .store import DEFAULT_DB_PATH, STORAGE_KEYS, KeyValueStore

logger = logging.getLogger(__name__)


class ProductionLogDB:
    """Manages submitted production sheets."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH) -> None:
        self._store = KeyValueStore(db_path)

    def close(self) -> None:
        self._store.close()

    def get_entries(self) -> list[ProductionEntry]:
        raw = self._store.load(STORAGE_KEYS["production"], [])
        try:
            return [ProductionEntry.from_dict(d) for d in raw]
        except (KeyError, TypeError, ValueError):
            logger.warning("Stored production log is malformed; treating it as empty")
            return []

    def add_entry(self, entry: ProductionEntry) -> None:
        entries = self.get_entries()
        entries.append(entry)
        self._store.save(
            STORAGE_KEYS["production"], [e.to_dict() for e in entries]
        )
