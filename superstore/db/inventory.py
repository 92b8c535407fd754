"""Inventory item CRUD, weekly counts and week bookkeeping."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from ..models import InventoryItem, new_id
from .store import DEFAULT_DB_PATH, STORAGE_KEYS, KeyValueStore

if TYPE_CHECKING:
    from ..models import WasteEntry

logger = logging.getLogger(__name__)

DEFAULT_INVENTORY: tuple[InventoryItem, ...] = (
    InventoryItem("1", "Chicken Tenders", "Protein", 50, 32, "lbs"),
    InventoryItem("2", "Hot Dog Franks", "Protein", 100, 45, "pcs"),
    InventoryItem("3", "Potato Wedges", "Sides", 40, 28, "lbs"),
    InventoryItem("4", "Buffalo Wings", "Protein", 60, 38, "lbs"),
    InventoryItem("5", "Sub Rolls", "Bread", 80, 55, "pcs"),
    InventoryItem("6", "Cheese Slices", "Dairy", 120, 78, "pcs"),
    InventoryItem("7", "Jalapeños", "Toppings", 20, 12, "lbs"),
    InventoryItem("8", "BBQ Sauce", "Sauces", 15, 8, "gal"),
    InventoryItem("9", "Corn Dogs", "Protein", 75, 42, "pcs"),
    InventoryItem("10", "Coleslaw Mix", "Sides", 25, 18, "lbs"),
)


class InventoryDB:
    """Manages the stored inventory list and the current week's figures."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH) -> None:
        self._store = KeyValueStore(db_path)

    def close(self) -> None:
        self._store.close()

    def get_items(self) -> list[InventoryItem]:
        """Return the stored inventory.

        The default inventory is written on first use and returned when the
        stored list is malformed.
        """
        raw = self._store.load(STORAGE_KEYS["items"])
        if raw is None:
            defaults = [replace(i) for i in DEFAULT_INVENTORY]
            self.save_items(defaults)
            return defaults
        try:
            return [InventoryItem.from_dict(d) for d in raw]
        except (KeyError, TypeError, ValueError):
            logger.warning("Stored inventory is malformed; using defaults")
            return [replace(i) for i in DEFAULT_INVENTORY]

    def save_items(self, items: list[InventoryItem]) -> None:
        self._store.save(STORAGE_KEYS["items"], [i.to_dict() for i in items])

    def find_item(self, name: str) -> InventoryItem | None:
        """Look up an item by name, ignoring case."""
        lower = name.strip().lower()
        for item in self.get_items():
            if item.name.lower() == lower:
                return item
        return None

    def add_item(
        self,
        name: str,
        category: str,
        par_level: int,
        unit: str = "pcs",
        current_stock: int = 0,
    ) -> InventoryItem:
        """Add a new item.

        Raises:
            ValueError: If the name is blank or already used, or a quantity
                is negative.
        """
        name = name.strip()
        if not name:
            raise ValueError("Item name must not be empty")
        if par_level < 0 or current_stock < 0:
            raise ValueError("Par level and stock must be zero or more")

        items = self.get_items()
        if any(i.name.lower() == name.lower() for i in items):
            raise ValueError(f"Item already exists in inventory: {name}")

        item = InventoryItem(
            id=new_id("item"),
            name=name,
            category=category,
            par_level=par_level,
            current_stock=current_stock,
            unit=unit,
        )
        items.append(item)
        self.save_items(items)
        return item

    def update_item(self, item_id: str, **changes) -> InventoryItem:
        """Apply field changes to one item and return the updated item.

        Raises:
            ValueError: If no item has ``item_id``.
        """
        items = self.get_items()
        for idx, item in enumerate(items):
            if item.id == item_id:
                updated = replace(item, **changes)
                items[idx] = updated
                self.save_items(items)
                return updated
        raise ValueError(f"Unknown inventory item: {item_id}")

    def delete_item(self, item_id: str) -> bool:
        """Delete an item by ID. Returns False if it did not exist."""
        items = self.get_items()
        remaining = [i for i in items if i.id != item_id]
        if len(remaining) == len(items):
            return False
        self.save_items(remaining)
        return True

    def set_par_level(self, item_id: str, value: int) -> InventoryItem:
        if value < 0:
            raise ValueError("Par level must be zero or more")
        return self.update_item(item_id, par_level=value)

    def set_count(self, item_id: str, value: int) -> InventoryItem:
        if value < 0:
            raise ValueError("Count must be zero or more")
        return self.update_item(item_id, current_stock=value)

    def submit_weekly_counts(self, counts: dict[str, int | None]) -> list[InventoryItem]:
        """Store a weekly count sheet keyed by item ID.

        Items without a count (missing or None) keep their current stock.
        """
        for value in counts.values():
            if value is not None and value < 0:
                raise ValueError("Count must be zero or more")
        items = [
            replace(i, current_stock=counts[i.id])
            if counts.get(i.id) is not None
            else i
            for i in self.get_items()
        ]
        self.save_items(items)
        return items

    def get_week_start_stocks(self) -> dict[str, int]:
        raw = self._store.load(STORAGE_KEYS["week_start"], {})
        return raw if isinstance(raw, dict) else {}

    def set_week_start_stocks(self, stocks: dict[str, int]) -> None:
        self._store.save(STORAGE_KEYS["week_start"], stocks)

    def get_ordered_quantities(self) -> dict[str, int]:
        raw = self._store.load(STORAGE_KEYS["ordered"], {})
        return raw if isinstance(raw, dict) else {}

    def record_order(self, item_name: str, quantity: int) -> int:
        """Add a delivered order to this week's running total for an item."""
        if quantity <= 0:
            raise ValueError("Ordered quantity must be positive")
        ordered = self.get_ordered_quantities()
        ordered[item_name] = ordered.get(item_name, 0) + quantity
        self._store.save(STORAGE_KEYS["ordered"], ordered)
        return ordered[item_name]

    def roll_week(
        self,
        waste_entries: list[WasteEntry],
        now: datetime | None = None,
        window_days: int = 7,
    ) -> list[InventoryItem]:
        """Close the week: save sales baselines, start stocks, clear orders."""
        from ..analytics import roll_week

        items, next_start = roll_week(
            self.get_items(),
            waste_entries,
            self.get_week_start_stocks(),
            self.get_ordered_quantities(),
            now=now,
            window_days=window_days,
        )
        self.save_items(items)
        self.set_week_start_stocks(next_start)
        self._store.save(STORAGE_KEYS["ordered"], {})
        logger.info("Rolled over week for %d items", len(items))
        return items
