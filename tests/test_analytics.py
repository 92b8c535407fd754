"""Tests for weekly sales analytics and order suggestions."""

from datetime import datetime, timedelta, timezone

import pytest

from superstore.analytics import (
    OrderSuggestion,
    WeeklySalesData,
    calculate_weekly_sales,
    generate_all_order_suggestions,
    generate_order_suggestion,
    recent_waste,
    restock_quantity,
    roll_week,
    stock_status,
)
from superstore.models import InventoryItem, WasteEntry

NOW = datetime(2025, 3, 10, 12, 0)


def _waste(item: str, quantity: int, days_ago: float = 1) -> WasteEntry:
    return WasteEntry(
        id=f"w-{item}-{quantity}-{days_ago}",
        item=item,
        quantity=quantity,
        timestamp=NOW - timedelta(days=days_ago),
    )


def _sales(trend: float = 0.0, waste_rate: float = 0.0, par: int = 100) -> WeeklySalesData:
    return WeeklySalesData(
        item_name="Hot Dog",
        sold=50,
        wasted=0,
        waste_rate=waste_rate,
        sales_trend=trend,
        current_par=par,
    )


class TestCalculateWeeklySales:
    def test_sold_includes_orders_and_waste(self):
        item = InventoryItem("1", "Corn Dog", "Protein", 40, 10, last_week_stock=16)
        data = calculate_weekly_sales(item, [_waste("Corn Dog", 5)], 30, ordered=5)

        assert data.sold == 20  # (30 + 5) - (10 + 5)
        assert data.wasted == 5
        assert data.waste_rate == pytest.approx(20.0)
        assert data.sales_trend == pytest.approx(25.0)
        assert data.current_par == 40

    def test_waste_matched_by_exact_name(self):
        item = InventoryItem("1", "Corn Dog", "Protein", 40, 10)
        entries = [_waste("Corn Dog", 2), _waste("corn dog", 7), _waste("Hot Dog", 9)]
        data = calculate_weekly_sales(item, entries, 30)
        assert data.wasted == 2

    def test_no_baseline_means_flat_trend(self):
        item = InventoryItem("1", "Wings", "Protein", 60, 38)
        data = calculate_weekly_sales(item, [], 60)
        assert data.sold == 22
        assert data.sales_trend == 0.0

    def test_zero_baseline_treated_as_missing(self):
        item = InventoryItem("1", "Wings", "Protein", 60, 38, last_week_stock=0)
        data = calculate_weekly_sales(item, [], 60)
        assert data.sales_trend == 0.0

    def test_negative_sold_is_clamped(self):
        item = InventoryItem("1", "Bacon", "Protein", 20, 20, last_week_stock=10)
        data = calculate_weekly_sales(item, [], 10)

        assert data.sold == 0
        assert data.waste_rate == 0.0
        # Trend uses the unclamped figure: (-10 - 10) / 10
        assert data.sales_trend == pytest.approx(-200.0)

    def test_no_sales_means_no_waste_rate(self):
        item = InventoryItem("1", "Bacon", "Protein", 20, 15)
        data = calculate_weekly_sales(item, [_waste("Bacon", 5)], 20)
        assert data.sold == 0
        assert data.waste_rate == 0.0


class TestGenerateOrderSuggestion:
    def test_strong_growth_scales_with_trend(self):
        s = generate_order_suggestion(_sales(trend=25.0), "Protein")
        assert s.suggested_order == 125
        assert s.adjustment == 25
        assert s.trend == "hot"
        assert s.priority == 1
        assert s.reason == "Sales up 25% - order more"

    def test_growth_boundary_at_twenty(self):
        s = generate_order_suggestion(_sales(trend=20.0, par=50), "Protein")
        assert s.suggested_order == 60
        assert s.priority == 1

    def test_mild_growth_adds_fifteen_percent(self):
        s = generate_order_suggestion(_sales(trend=12.0, par=30), "Protein")
        assert s.suggested_order == 35  # 30 + ceil(4.5)
        assert s.trend == "hot"
        assert s.priority == 2
        assert s.reason == "Sales up 12% - slight increase"

    def test_mild_growth_boundary_at_ten(self):
        s = generate_order_suggestion(_sales(trend=10.0), "Protein")
        assert s.priority == 2

    def test_strong_decline(self):
        s = generate_order_suggestion(_sales(trend=-25.0), "Protein")
        assert s.suggested_order == 75
        assert s.adjustment == -25
        assert s.trend == "cold"
        assert s.priority == 4
        assert s.reason == "Sales down 25% - reduce order"

    def test_mild_decline(self):
        s = generate_order_suggestion(_sales(trend=-12.0), "Protein")
        assert s.suggested_order == 85
        assert s.trend == "cold"
        assert s.priority == 3
        assert s.reason == "Sales down 12% - slight reduction"

    def test_decline_boundary_at_minus_ten(self):
        s = generate_order_suggestion(_sales(trend=-10.0), "Protein")
        assert s.trend == "cold"
        assert s.suggested_order == 85

    def test_steady(self):
        s = generate_order_suggestion(_sales(trend=5.0), "Protein")
        assert s.suggested_order == 100
        assert s.adjustment == 0
        assert s.trend == "normal"
        assert s.priority == 3
        assert s.reason == "Steady sales - order at par"

    def test_high_waste_wins_over_growth(self):
        s = generate_order_suggestion(_sales(trend=50.0, waste_rate=35.0, par=10), "Protein")
        assert s.suggested_order == 8  # 10 - floor(2.5)
        assert s.trend == "cold"
        assert s.priority == 5
        assert s.reason == "High waste rate (35%) - reduce production"

    @pytest.mark.parametrize("trend", [-50.0, -15.0, 0.0, 15.0, 50.0])
    def test_high_waste_always_cold(self, trend):
        s = generate_order_suggestion(_sales(trend=trend, waste_rate=30.5, par=40), "Protein")
        assert s.trend == "cold"
        assert s.priority == 5
        assert s.suggested_order == 30
        assert s.adjustment == s.suggested_order - s.current_par == -10

    @pytest.mark.parametrize("trend", [-50.0, -20.0, -15.0, 0.0, 12.5, 20.0, 50.0])
    @pytest.mark.parametrize("waste_rate", [0.0, 20.0, 45.0])
    def test_adjustment_is_order_minus_par(self, trend, waste_rate):
        s = generate_order_suggestion(_sales(trend=trend, waste_rate=waste_rate, par=37), "Sides")
        assert s.adjustment == s.suggested_order - s.current_par
        assert s.suggested_order >= 1

    def test_reduction_never_below_one(self):
        s = generate_order_suggestion(_sales(trend=-30.0, par=1), "Protein")
        assert s.suggested_order == 1

    def test_waste_warning_suffix(self):
        s = generate_order_suggestion(_sales(trend=25.0, waste_rate=30.0), "Protein")
        assert s.reason == "Sales up 25% - order more ⚠️ (30% waste)"

    def test_no_warning_at_fifteen_percent_waste(self):
        s = generate_order_suggestion(_sales(waste_rate=15.0), "Protein")
        assert "⚠️" not in s.reason

    def test_percentages_round_half_up(self):
        s = generate_order_suggestion(_sales(trend=12.5), "Protein")
        assert s.reason == "Sales up 13% - slight increase"

    def test_to_dict_and_label(self):
        s = generate_order_suggestion(_sales(trend=25.0), "Protein")
        d = s.to_dict()
        assert d["item_name"] == "Hot Dog"
        assert d["category"] == "Protein"
        assert d["trend"] == "hot"
        assert s.trend_label == "🔥 hot"


class TestGenerateAllOrderSuggestions:
    def test_wings_example(self):
        item = InventoryItem("1", "Wings", "Protein", 60, 38)
        waste = [_waste("Wings", 3), _waste("Wings", 2)]

        [s] = generate_all_order_suggestions([item], waste, {"Wings": 60}, now=NOW)

        assert s.suggested_order == 60
        assert s.trend == "normal"
        assert s.priority == 3
        assert s.reason == "Steady sales - order at par ⚠️ (23% waste)"
        assert s.waste_rate == pytest.approx(5 / 22 * 100)

    def test_old_waste_ignored(self):
        item = InventoryItem("1", "Wings", "Protein", 60, 38)
        waste = [_waste("Wings", 20, days_ago=10)]
        [s] = generate_all_order_suggestions([item], waste, {"Wings": 60}, now=NOW)
        assert s.waste_rate == 0.0

    def test_missing_week_start_uses_current_stock(self):
        item = InventoryItem("1", "Wings", "Protein", 60, 38)
        [s] = generate_all_order_suggestions([item], [], {}, now=NOW)
        assert s.trend == "normal"
        assert s.suggested_order == 60

    def test_sorted_by_priority(self):
        inventory = [
            InventoryItem("1", "Steady", "Protein", 10, 5, last_week_stock=5),
            InventoryItem("2", "Wasted", "Protein", 10, 5, last_week_stock=5),
            InventoryItem("3", "Growing", "Protein", 10, 0, last_week_stock=5),
        ]
        week_start = {"Steady": 10, "Wasted": 14, "Growing": 10}
        waste = [_waste("Wasted", 4)]

        result = generate_all_order_suggestions(inventory, waste, week_start, now=NOW)

        assert [s.item_name for s in result] == ["Growing", "Steady", "Wasted"]
        assert [s.priority for s in result] == [1, 3, 5]

    def test_ordered_quantities_add_to_sold(self):
        item = InventoryItem("1", "Wings", "Protein", 60, 38, last_week_stock=22)
        [s] = generate_all_order_suggestions(
            [item], [], {"Wings": 60}, {"Wings": 11}, now=NOW
        )
        # sold 33 vs 22 last week: +50%
        assert s.trend == "hot"
        assert s.suggested_order == 90

    def test_empty_inventory(self):
        assert generate_all_order_suggestions([], [], {}, now=NOW) == []


class TestRecentWaste:
    def test_window(self):
        entries = [_waste("Bacon", 1, days_ago=2), _waste("Bacon", 2, days_ago=8)]
        assert [e.quantity for e in recent_waste(entries, now=NOW)] == [1]
        assert len(recent_waste(entries, days=14, now=NOW)) == 2

    def test_aware_timestamps(self):
        now = datetime.now(timezone.utc)
        entries = [
            WasteEntry("w1", "Bacon", 1, now - timedelta(days=1)),
            WasteEntry("w2", "Bacon", 2, now - timedelta(days=9)),
        ]
        assert [e.quantity for e in recent_waste(entries, now=now)] == [1]
        # Naive cutoff against aware entries
        assert [e.quantity for e in recent_waste(entries)] == [1]

    def test_aware_timestamps_in_suggestions(self):
        item = InventoryItem("1", "Wings", "Protein", 60, 38)
        waste = [WasteEntry("w1", "Wings", 5, datetime.now(timezone.utc) - timedelta(days=1))]

        [s] = generate_all_order_suggestions([item], waste, {"Wings": 60})

        assert s.waste_rate == pytest.approx(5 / 22 * 100)
        assert s.priority == 3


class TestStock:
    def test_restock_quantity(self):
        item = InventoryItem("1", "Sub Rolls", "Bread", 80, 55)
        assert restock_quantity(item) == 25
        assert restock_quantity(item, count=90) == 0

    @pytest.mark.parametrize(
        "count,expected",
        [(20, "critical"), (29, "critical"), (30, "low"), (59, "low"), (60, "good")],
    )
    def test_stock_status(self, count, expected):
        item = InventoryItem("1", "Hot Dog Franks", "Protein", 100, 0)
        assert stock_status(item, count) == expected

    def test_zero_par_is_good(self):
        item = InventoryItem("1", "New Item", "Protein", 0, 0)
        assert stock_status(item) == "good"


class TestRollWeek:
    def test_stores_sold_as_baseline(self):
        item = InventoryItem("1", "Wings", "Protein", 60, 38)
        items, next_start = roll_week(
            [item], [_waste("Wings", 5)], {"Wings": 60}, now=NOW
        )

        assert items[0].last_week_stock == 17
        assert next_start == {"Wings": 38}
        # Input left untouched
        assert item.last_week_stock is None

    def test_next_week_trend_uses_baseline(self):
        item = InventoryItem("1", "Wings", "Protein", 60, 38)
        items, next_start = roll_week([item], [], {"Wings": 60}, now=NOW)

        # 22 sold last week; this week 33 sold
        items[0].current_stock = 5
        [s] = generate_all_order_suggestions(items, [], next_start, now=NOW)
        assert isinstance(s, OrderSuggestion)
        assert s.trend == "hot"
        assert s.reason == "Sales up 50% - order more"
