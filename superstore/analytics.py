"""Weekly sales analytics and par-level order suggestions."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from .models import InventoryItem, WasteEntry, parse_timestamp

logger = logging.getLogger(__name__)

WASTE_WINDOW_DAYS = 7

TREND_HOT = "hot"
TREND_NORMAL = "normal"
TREND_COLD = "cold"

TREND_LABELS: dict[str, str] = {
    TREND_HOT: "🔥 hot",
    TREND_NORMAL: "📊 normal",
    TREND_COLD: "❄️ cold",
}


@dataclass
class WeeklySalesData:
    item_name: str
    sold: int
    wasted: int
    waste_rate: float  # percent
    sales_trend: float  # percent change vs. last week
    current_par: int


@dataclass
class OrderSuggestion:
    item_name: str
    category: str
    current_par: int
    suggested_order: int
    adjustment: int  # suggested_order - current_par
    reason: str
    trend: str  # "hot" | "normal" | "cold"
    waste_rate: float
    priority: int  # 1 (most urgent) .. 5

    @property
    def trend_label(self) -> str:
        return TREND_LABELS[self.trend]

    def to_dict(self) -> dict:
        return {
            "item_name": self.item_name,
            "category": self.category,
            "current_par": self.current_par,
            "suggested_order": self.suggested_order,
            "adjustment": self.adjustment,
            "reason": self.reason,
            "trend": self.trend,
            "waste_rate": round(self.waste_rate, 1),
            "priority": self.priority,
        }


def recent_waste(
    entries: list[WasteEntry],
    days: int = WASTE_WINDOW_DAYS,
    now: datetime | None = None,
) -> list[WasteEntry]:
    """Return entries logged within the trailing ``days`` window."""
    cutoff = parse_timestamp(now or datetime.now()) - timedelta(days=days)
    return [e for e in entries if parse_timestamp(e.timestamp) >= cutoff]


def calculate_weekly_sales(
    item: InventoryItem,
    waste_entries: list[WasteEntry],
    week_start_stock: int,
    ordered: int = 0,
) -> WeeklySalesData:
    """Derive this week's sold/wasted figures for one item.

    sold = (week start stock + ordered) - (current stock + wasted)

    The unclamped ``sold`` feeds the waste rate and the trend; only the
    returned ``sold`` is clamped at zero.
    """
    item_waste = sum(w.quantity for w in waste_entries if w.item == item.name)

    sold = (week_start_stock + ordered) - (item.current_stock + item_waste)

    waste_rate = item_waste / (sold + item_waste) * 100 if sold > 0 else 0.0

    # No baseline recorded yet: compare against this week (0% trend)
    last_week_sold = item.last_week_stock or sold
    if last_week_sold > 0:
        sales_trend = (sold - last_week_sold) / last_week_sold * 100
    else:
        sales_trend = 0.0

    return WeeklySalesData(
        item_name=item.name,
        sold=max(0, sold),
        wasted=item_waste,
        waste_rate=waste_rate,
        sales_trend=sales_trend,
        current_par=item.par_level,
    )


def _reduce(par: int, fraction: float) -> int:
    return max(1, par - math.floor(par * fraction))


def _pct(value: float) -> int:
    """Round a non-negative percentage half up (12.5 -> 13)."""
    return math.floor(value + 0.5)


def generate_order_suggestion(
    sales_data: WeeklySalesData, category: str
) -> OrderSuggestion:
    """Turn weekly sales figures into an order quantity.

    Branches are checked in order and the first match wins:
    high waste, strong growth, mild growth, strong decline, mild decline,
    steady.
    """
    par = sales_data.current_par
    trend_pct = sales_data.sales_trend
    waste_rate = sales_data.waste_rate

    if waste_rate > 30:
        suggested = _reduce(par, 0.25)
        reason = f"High waste rate ({_pct(waste_rate)}%) - reduce production"
        trend, priority = TREND_COLD, 5
    elif trend_pct >= 20:
        suggested = par + math.ceil(par * (trend_pct / 100))
        reason = f"Sales up {_pct(trend_pct)}% - order more"
        trend, priority = TREND_HOT, 1
    elif trend_pct >= 10:
        suggested = par + math.ceil(par * 0.15)
        reason = f"Sales up {_pct(trend_pct)}% - slight increase"
        trend, priority = TREND_HOT, 2
    elif trend_pct <= -20:
        suggested = _reduce(par, 0.25)
        reason = f"Sales down {_pct(abs(trend_pct))}% - reduce order"
        trend, priority = TREND_COLD, 4
    elif trend_pct <= -10:
        suggested = _reduce(par, 0.15)
        reason = f"Sales down {_pct(abs(trend_pct))}% - slight reduction"
        trend, priority = TREND_COLD, 3
    else:
        suggested = par
        reason = "Steady sales - order at par"
        trend, priority = TREND_NORMAL, 3

    if 15 < waste_rate <= 30:
        reason += f" ⚠️ ({_pct(waste_rate)}% waste)"

    return OrderSuggestion(
        item_name=sales_data.item_name,
        category=category,
        current_par=par,
        suggested_order=suggested,
        adjustment=suggested - par,
        reason=reason,
        trend=trend,
        waste_rate=waste_rate,
        priority=priority,
    )


def generate_all_order_suggestions(
    inventory: list[InventoryItem],
    waste_entries: list[WasteEntry],
    week_start_stocks: dict[str, int],
    ordered_quantities: dict[str, int] | None = None,
    *,
    now: datetime | None = None,
    window_days: int = WASTE_WINDOW_DAYS,
) -> list[OrderSuggestion]:
    """Build order suggestions for every inventory item, most urgent first.

    Only waste logged in the trailing window counts. Items without a
    recorded week-start stock use their current stock instead.
    """
    ordered_quantities = ordered_quantities or {}
    window = recent_waste(waste_entries, days=window_days, now=now)

    suggestions: list[OrderSuggestion] = []
    for item in inventory:
        week_start = week_start_stocks.get(item.name) or item.current_stock
        ordered = ordered_quantities.get(item.name) or 0
        sales = calculate_weekly_sales(item, window, week_start, ordered)
        suggestions.append(generate_order_suggestion(sales, item.category))

    logger.debug(
        "Generated %d order suggestions from %d recent waste entries",
        len(suggestions),
        len(window),
    )
    return sorted(suggestions, key=lambda s: s.priority)


def restock_quantity(item: InventoryItem, count: int | None = None) -> int:
    """Units needed to bring ``item`` back to par, using a fresh count if given."""
    on_hand = count if count is not None else item.current_stock
    return max(0, item.par_level - on_hand)


def stock_status(item: InventoryItem, count: int | None = None) -> str:
    """Classify stock against par: "critical", "low" or "good"."""
    if item.par_level <= 0:
        return "good"
    on_hand = count if count is not None else item.current_stock
    ratio = on_hand / item.par_level
    if ratio < 0.3:
        return "critical"
    if ratio < 0.6:
        return "low"
    return "good"


def roll_week(
    inventory: list[InventoryItem],
    waste_entries: list[WasteEntry],
    week_start_stocks: dict[str, int],
    ordered_quantities: dict[str, int] | None = None,
    *,
    now: datetime | None = None,
    window_days: int = WASTE_WINDOW_DAYS,
) -> tuple[list[InventoryItem], dict[str, int]]:
    """Close out the current week.

    Returns the inventory with each item's sold figure stored as its new
    trend baseline, plus next week's starting stock per item.
    """
    ordered_quantities = ordered_quantities or {}
    window = recent_waste(waste_entries, days=window_days, now=now)

    updated: list[InventoryItem] = []
    next_week_start: dict[str, int] = {}
    for item in inventory:
        week_start = week_start_stocks.get(item.name) or item.current_stock
        ordered = ordered_quantities.get(item.name) or 0
        sales = calculate_weekly_sales(item, window, week_start, ordered)
        updated.append(replace(item, last_week_stock=sales.sold))
        next_week_start[item.name] = item.current_stock
    return updated, next_week_start
