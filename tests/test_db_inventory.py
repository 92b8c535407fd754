"""Tests for InventoryDB CRUD and week bookkeeping."""

from datetime import datetime, timedelta

import pytest

from superstore.db.inventory import DEFAULT_INVENTORY, InventoryDB
from superstore.db.store import STORAGE_KEYS, KeyValueStore
from superstore.models import WasteEntry


@pytest.fixture
def db(tmp_path):
    """Create a temporary InventoryDB."""
    inventory = InventoryDB(db_path=tmp_path / "test.db")
    yield inventory
    inventory.close()


def test_seeds_default_inventory(db):
    items = db.get_items()
    assert len(items) == 10
    assert items[0].name == "Chicken Tenders"
    assert items[0].par_level == 50
    assert items[0].unit == "lbs"


def test_defaults_are_copies(db):
    items = db.get_items()
    items[0].current_stock = 999
    assert DEFAULT_INVENTORY[0].current_stock == 32


def test_malformed_data_falls_back_to_defaults(tmp_path):
    kv = KeyValueStore(tmp_path / "test.db")
    kv.save(STORAGE_KEYS["items"], [{"oops": True}])
    kv.close()

    db = InventoryDB(tmp_path / "test.db")
    try:
        assert [i.name for i in db.get_items()] == [i.name for i in DEFAULT_INVENTORY]
    finally:
        db.close()


def test_find_item_case_insensitive(db):
    assert db.find_item("bbq sauce").name == "BBQ Sauce"
    assert db.find_item("  CORN DOGS ").id == "9"
    assert db.find_item("Nachos") is None


def test_add_item(db):
    item = db.add_item("Egg Rolls", "Protein", par_level=30)
    assert item.id.startswith("item-")
    assert item.current_stock == 0
    assert item.unit == "pcs"
    assert db.find_item("egg rolls") == item
    assert len(db.get_items()) == 11


def test_add_item_rejects_duplicates(db):
    with pytest.raises(ValueError, match="already exists"):
        db.add_item("buffalo wings", "Protein", par_level=10)


@pytest.mark.parametrize(
    "name,par",
    [("", 10), ("   ", 10), ("Nachos", -1)],
)
def test_add_item_rejects_bad_input(db, name, par):
    with pytest.raises(ValueError):
        db.add_item(name, "Protein", par_level=par)


def test_update_and_delete(db):
    updated = db.update_item("3", unit="kg", category="Sides")
    assert updated.unit == "kg"
    assert db.find_item("Potato Wedges").unit == "kg"

    assert db.delete_item("3") is True
    assert db.delete_item("3") is False
    assert db.find_item("Potato Wedges") is None


def test_update_unknown_item(db):
    with pytest.raises(ValueError, match="Unknown inventory item"):
        db.update_item("missing", par_level=3)


def test_set_par_level_and_count(db):
    assert db.set_par_level("1", 70).par_level == 70
    assert db.set_count("1", 12).current_stock == 12
    with pytest.raises(ValueError):
        db.set_par_level("1", -5)
    with pytest.raises(ValueError):
        db.set_count("1", -1)


def test_submit_weekly_counts(db):
    items = db.submit_weekly_counts({"1": 20, "2": None, "4": 0})
    by_id = {i.id: i for i in items}
    assert by_id["1"].current_stock == 20
    assert by_id["2"].current_stock == 45  # unchanged
    assert by_id["4"].current_stock == 0
    assert db.find_item("Chicken Tenders").current_stock == 20


def test_submit_weekly_counts_rejects_negative(db):
    with pytest.raises(ValueError):
        db.submit_weekly_counts({"1": -3})
    assert db.find_item("Chicken Tenders").current_stock == 32


def test_week_start_stocks(db):
    assert db.get_week_start_stocks() == {}
    db.set_week_start_stocks({"Buffalo Wings": 60})
    assert db.get_week_start_stocks() == {"Buffalo Wings": 60}


def test_record_order_accumulates(db):
    assert db.record_order("Sub Rolls", 10) == 10
    assert db.record_order("Sub Rolls", 5) == 15
    assert db.get_ordered_quantities() == {"Sub Rolls": 15}
    with pytest.raises(ValueError):
        db.record_order("Sub Rolls", 0)


def test_roll_week(db):
    now = datetime(2025, 3, 10, 0, 0)
    db.set_week_start_stocks({"Buffalo Wings": 60})
    db.record_order("Buffalo Wings", 10)
    waste = [
        WasteEntry("w1", "Buffalo Wings", 5, now - timedelta(days=1)),
        WasteEntry("w2", "Buffalo Wings", 50, now - timedelta(days=30)),
    ]

    items = db.roll_week(waste, now=now)

    wings = next(i for i in items if i.name == "Buffalo Wings")
    assert wings.last_week_stock == 27  # (60 + 10) - (38 + 5)
    assert db.find_item("Buffalo Wings").last_week_stock == 27
    assert db.get_week_start_stocks()["Buffalo Wings"] == 38
    assert db.get_week_start_stocks()["Sub Rolls"] == 55
    assert db.get_ordered_quantities() == {}
