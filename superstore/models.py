"""Record types for inventory, waste, production and staff data."""

from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime


def new_id(prefix: str = "") -> str:
    """Return a unique string id, optionally prefixed (``waste-3f2a...``)."""
    token = uuid.uuid4().hex[:12]
    return f"{prefix}-{token}" if prefix else token


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse an ISO8601 timestamp into a naive local datetime."""
    ts = value if isinstance(value, datetime) else datetime.fromisoformat(value)
    if ts.tzinfo is not None:
        ts = ts.astimezone().replace(tzinfo=None)
    return ts


@dataclass
class InventoryItem:
    """A stocked item with its par level and latest count."""

    id: str
    name: str
    category: str
    par_level: int
    current_stock: int
    unit: str = "pcs"
    # Previous week's sold figure, the baseline for the sales trend
    last_week_stock: int | None = None

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> InventoryItem:
        last_week = data.get("last_week_stock")
        return cls(
            id=str(data["id"]),
            name=data["name"],
            category=data.get("category", ""),
            par_level=int(data.get("par_level", 0)),
            current_stock=int(data.get("current_stock", 0)),
            unit=data.get("unit", "pcs"),
            last_week_stock=int(last_week) if last_week is not None else None,
        )


@dataclass
class WasteEntry:
    """One logged discard of an item."""

    id: str
    item: str  # matched against InventoryItem.name by string equality
    quantity: int
    timestamp: datetime
    category: str = ""
    unit: str = "pcs"
    employee: str = ""

    def to_dict(self) -> dict:
        d = asdict(self)
        d["timestamp"] = self.timestamp.isoformat()
        return d

    @classmethod
    def from_dict(cls, data: dict) -> WasteEntry:
        return cls(
            id=str(data["id"]),
            item=data["item"],
            quantity=int(data["quantity"]),
            timestamp=parse_timestamp(data["timestamp"]),
            category=data.get("category", ""),
            unit=data.get("unit", "pcs"),
            employee=data.get("employee", ""),
        )


@dataclass
class ProductionItem:
    name: str
    quantity: int
    category: str = ""


@dataclass
class ProductionEntry:
    """A production sheet: what one employee cooked during a shift."""

    id: str
    employee_name: str
    shift: str  # "Morning" | "Afternoon" | "Night"
    date: datetime
    items: list[ProductionItem] = field(default_factory=list)

    @property
    def total_cooked(self) -> int:
        return sum(i.quantity for i in self.items)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "employee_name": self.employee_name,
            "shift": self.shift,
            "date": self.date.isoformat(),
            "items": [asdict(i) for i in self.items],
        }

    @classmethod
    def from_dict(cls, data: dict) -> ProductionEntry:
        return cls(
            id=str(data["id"]),
            employee_name=data["employee_name"],
            shift=data.get("shift", ""),
            date=parse_timestamp(data["date"]),
            items=[
                ProductionItem(
                    name=i["name"],
                    quantity=int(i["quantity"]),
                    category=i.get("category", ""),
                )
                for i in data.get("items", [])
            ],
        )


@dataclass
class Employee:
    id: str
    name: str
    role: str = "employee"  # "employee" | "manager"
    active: bool = True

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> Employee:
        return cls(
            id=str(data["id"]),
            name=data["name"],
            role=data.get("role", "employee"),
            active=bool(data.get("active", True)),
        )
