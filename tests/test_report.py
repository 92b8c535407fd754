"""Tests for the plain-text order report."""

from datetime import datetime

from superstore.analytics import OrderSuggestion
from superstore.config import SuperstoreConfig
from superstore.db.inventory import InventoryDB
from superstore.report import collect_order_suggestions, format_order_report, write_order_report

GENERATED = datetime(2025, 3, 10, 14, 5, 9)


def _suggestion(name, par, order, trend, reason="", priority=3) -> OrderSuggestion:
    return OrderSuggestion(
        item_name=name,
        category="Protein",
        current_par=par,
        suggested_order=order,
        adjustment=order - par,
        reason=reason,
        trend=trend,
        waste_rate=0.0,
        priority=priority,
    )


SUGGESTIONS = [
    _suggestion("Buffalo Wings", 40, 48, "hot", "Selling fast! 38 sold, up 27% from last week", 2),
    _suggestion("Sub Rolls", 80, 80, "normal", "Steady sales, low waste"),
    _suggestion("Corn Dogs", 75, 60, "cold", "High waste (25%) - reduce order", 1),
]


class TestFormatOrderReport:
    def test_full_layout(self):
        text = format_order_report(SUGGESTIONS, generated_at=GENERATED)
        rule = "=" * 60
        dash = "-" * 60

        assert text == "\n".join(
            [
                "KEITH'S SUPERSTORE - SMART ORDER REPORT",
                "Generated: 03/10/2025 02:05:09 PM",
                rule,
                "",
                "🔥 HOT ITEMS (Order Above Par)",
                dash,
                "Buffalo Wings             Par:  40 → Order:  48 (+8)",
                "   Selling fast! 38 sold, up 27% from last week",
                "",
                "",
                "📊 NORMAL ITEMS (Order at Par)",
                dash,
                "Sub Rolls                 Order: 80",
                "",
                "",
                "❄️ COLD ITEMS (Order Below Par)",
                dash,
                "Corn Dogs                 Par:  75 → Order:  60 (-15)",
                "   High waste (25%) - reduce order",
                "",
                "",
                rule,
                "SUMMARY:",
                "  Hot Items: 1",
                "  Normal Items: 1",
                "  Cold Items: 1",
                "  Total Adjustments: 23 items",
            ]
        ) + "\n"

    def test_empty_sections_omitted(self):
        text = format_order_report(SUGGESTIONS[1:2], generated_at=GENERATED)
        assert "HOT ITEMS" not in text
        assert "COLD ITEMS" not in text
        assert "NORMAL ITEMS" in text
        assert "Total Adjustments: 0 items" in text

    def test_no_suggestions_still_has_summary(self):
        text = format_order_report([], generated_at=GENERATED)
        assert "SUMMARY:" in text
        assert "  Hot Items: 0" in text

    def test_custom_store_name(self):
        text = format_order_report([], generated_at=GENERATED, store_name="STORE 12")
        assert text.startswith("STORE 12 - SMART ORDER REPORT\n")


def test_write_order_report(tmp_path):
    path = write_order_report("hello\n", tmp_path / "reports", generated_at=GENERATED)
    assert path.name == "order_report_20250310_1405.txt"
    assert path.read_text(encoding="utf-8") == "hello\n"


def test_collect_order_suggestions(tmp_path):
    config = SuperstoreConfig()
    config.storage.path = str(tmp_path / "store.db")

    suggestions = collect_order_suggestions(config, now=GENERATED)

    assert len(suggestions) == 10
    names = {s.item_name for s in suggestions}
    assert "Buffalo Wings" in names
    # No sales recorded yet, so everything orders at par
    assert all(s.trend == "normal" and s.adjustment == 0 for s in suggestions)

    db = InventoryDB(tmp_path / "store.db")
    try:
        assert len(db.get_items()) == 10
    finally:
        db.close()
