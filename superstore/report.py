"""Plain-text weekly order report."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from .analytics import (
    TREND_COLD,
    TREND_HOT,
    TREND_NORMAL,
    OrderSuggestion,
    generate_all_order_suggestions,
)

if TYPE_CHECKING:
    from .config import SuperstoreConfig

logger = logging.getLogger(__name__)

DEFAULT_STORE_NAME = "KEITH'S SUPERSTORE"

_RULE_WIDTH = 60


def _change_row(s: OrderSuggestion, signed: bool) -> list[str]:
    adj = f"+{s.adjustment}" if signed else str(s.adjustment)
    return [
        f"{s.item_name:<25} Par: {s.current_par:>3} → "
        f"Order: {s.suggested_order:>3} ({adj})",
        f"   {s.reason}",
        "",
    ]


def format_order_report(
    suggestions: list[OrderSuggestion],
    generated_at: datetime | None = None,
    store_name: str = DEFAULT_STORE_NAME,
) -> str:
    """Render suggestions as a fixed-width report grouped by trend.

    Items keep their input order within each group. Empty groups are
    omitted; the summary is always present.
    """
    generated_at = generated_at or datetime.now()
    hot = [s for s in suggestions if s.trend == TREND_HOT]
    normal = [s for s in suggestions if s.trend == TREND_NORMAL]
    cold = [s for s in suggestions if s.trend == TREND_COLD]

    lines: list[str] = [
        f"{store_name} - SMART ORDER REPORT",
        f"Generated: {generated_at:%m/%d/%Y %I:%M:%S %p}",
        "=" * _RULE_WIDTH,
        "",
    ]

    if hot:
        lines += ["🔥 HOT ITEMS (Order Above Par)", "-" * _RULE_WIDTH]
        for s in hot:
            lines += _change_row(s, signed=True)

    if normal:
        lines += ["", "📊 NORMAL ITEMS (Order at Par)", "-" * _RULE_WIDTH]
        lines += [f"{s.item_name:<25} Order: {s.suggested_order}" for s in normal]
        lines.append("")

    if cold:
        lines += ["", "❄️ COLD ITEMS (Order Below Par)", "-" * _RULE_WIDTH]
        for s in cold:
            lines += _change_row(s, signed=False)

    total_adjustment = sum(abs(s.adjustment) for s in suggestions)
    lines += [
        "",
        "=" * _RULE_WIDTH,
        "SUMMARY:",
        f"  Hot Items: {len(hot)}",
        f"  Normal Items: {len(normal)}",
        f"  Cold Items: {len(cold)}",
        f"  Total Adjustments: {total_adjustment} items",
    ]
    return "\n".join(lines) + "\n"


def collect_order_suggestions(
    config: SuperstoreConfig, now: datetime | None = None
) -> list[OrderSuggestion]:
    """Load the stored inventory and waste log and run the order engine."""
    from .db import InventoryDB, WasteLogDB

    db_path = Path(config.storage.path).expanduser()
    inventory_db = InventoryDB(db_path)
    waste_db = WasteLogDB(db_path)
    try:
        return generate_all_order_suggestions(
            inventory_db.get_items(),
            waste_db.get_entries(),
            inventory_db.get_week_start_stocks(),
            inventory_db.get_ordered_quantities(),
            now=now,
            window_days=config.analytics.waste_window_days,
        )
    finally:
        inventory_db.close()
        waste_db.close()


def write_order_report(
    text: str,
    output_dir: str | Path,
    generated_at: datetime | None = None,
) -> Path:
    """Save a rendered report as ``order_report_YYYYMMDD_HHMM.txt``."""
    generated_at = generated_at or datetime.now()
    out_dir = Path(output_dir).expanduser()
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"order_report_{generated_at:%Y%m%d_%H%M}.txt"
    path.write_text(text, encoding="utf-8")
    logger.info("Order report written to %s", path)
    return path
