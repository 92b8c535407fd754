"""Append-only waste log."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from pathlib import Path

from ..models import WasteEntry, new_id
from .store import DEFAULT_DB_PATH, STORAGE_KEYS, KeyValueStore

logger = logging.getLogger(__name__)


class WasteLogDB:
    """Manages logged waste entries, newest first.

    Old entries are kept; analytics filter them by date instead.
    """

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH) -> None:
        self._store = KeyValueStore(db_path)

    def close(self) -> None:
        self._store.close()

    def get_entries(self) -> list[WasteEntry]:
        raw = self._store.load(STORAGE_KEYS["waste"], [])
        try:
            return [WasteEntry.from_dict(d) for d in raw]
        except (KeyError, TypeError, ValueError):
            logger.warning("Stored waste log is malformed; treating it as empty")
            return []

    def _save(self, entries: list[WasteEntry]) -> None:
        self._store.save(STORAGE_KEYS["waste"], [e.to_dict() for e in entries])

    def add_entry(
        self,
        item: str,
        quantity: int,
        employee: str = "",
        category: str = "",
        unit: str = "pcs",
        timestamp: datetime | None = None,
    ) -> WasteEntry:
        """Log a discard.

        Raises:
            ValueError: If quantity is not positive or item is blank.
        """
        if quantity <= 0:
            raise ValueError("Waste quantity must be positive")
        if not item.strip():
            raise ValueError("Waste item must not be empty")

        entry = WasteEntry(
            id=new_id("waste"),
            item=item.strip(),
            quantity=quantity,
            timestamp=timestamp or datetime.now(),
            category=category,
            unit=unit,
            employee=employee,
        )
        self._save([entry, *self.get_entries()])
        return entry

    def add_entries(self, entries: list[WasteEntry]) -> None:
        """Prepend several already-built entries in one write."""
        self._save([*entries, *self.get_entries()])

    def remove_entry(self, entry_id: str) -> bool:
        entries = self.get_entries()
        remaining = [e for e in entries if e.id != entry_id]
        if len(remaining) == len(entries):
            return False
        self._save(remaining)
        return True

    def get_recent(self, days: int = 7, now: datetime | None = None) -> list[WasteEntry]:
        cutoff = (now or datetime.now()) - timedelta(days=days)
        return [e for e in self.get_entries() if e.timestamp >= cutoff]

    def today_count(self, now: datetime | None = None) -> int:
        """Number of entries logged on the current calendar day."""
        today = (now or datetime.now()).date()
        return sum(1 for e in self.get_entries() if e.timestamp.date() == today)
