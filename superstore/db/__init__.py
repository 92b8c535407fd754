"""SQLite key-value storage for inventory, waste, production and staff data."""

from .inventory import DEFAULT_INVENTORY, InventoryDB
from .production_log import ProductionLogDB
from .schema import ensure_schema
from .staff import DEFAULT_STAFF, StaffDB
from .store import STORAGE_KEYS, KeyValueStore
from .waste_log import WasteLogDB

__all__ = [
    "DEFAULT_INVENTORY",
    "DEFAULT_STAFF",
    "InventoryDB",
    "KeyValueStore",
    "ProductionLogDB",
    "STORAGE_KEYS",
    "StaffDB",
    "WasteLogDB",
    "ensure_schema",
]
