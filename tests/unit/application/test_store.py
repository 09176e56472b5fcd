"""
Unit tests for LineItemStore.
"""

import pytest

from estimator.application import LineItemStore
from estimator.application.undo import UndoKind, describe
from estimator.domain.exceptions import CatalogLookupMiss, LineItemNotFound, ValidationError
from estimator.domain.models import (
    Category,
    Tier,
    CabinetLineItem,
    FlooringLineItem,
    HardwareLineItem,
    VanitySelection,
    KitchenSelection,
)


@pytest.fixture
def store(catalog):
    return LineItemStore(catalog)


def _names(store, category):
    return [item.label for item in store.items(category)]


class TestAdd:
    """Adding priced line items"""

    def test_add_cabinet(self, store):
        item = store.add(Category.CABINETS, "B12 Base", "3")

        assert isinstance(item, CabinetLineItem)
        assert item.quantity == 3
        assert item.unit_price == 189.0
        assert store.count(Category.CABINETS) == 1

    def test_add_flooring_fractional(self, store):
        item = store.add(Category.FLOORING, "Oak Laminate", "120.5")

        assert isinstance(item, FlooringLineItem)
        assert item.square_feet == 120.5
        assert item.line_total == pytest.approx(120.5 * 3.25)

    def test_insertion_order(self, store):
        store.add(Category.CABINETS, "B15 Base", 1)
        store.add(Category.CABINETS, "B12 Base", 1)
        store.add(Category.CABINETS, "W3030 Wall", 1)

        assert _names(store, Category.CABINETS) == ["B15 Base", "B12 Base", "W3030 Wall"]

    def test_case_insensitive_lookup(self, store):
        item = store.add(Category.HARDWARE, "round knob", 10)
        assert isinstance(item, HardwareLineItem)
        assert item.type == "Round Knob"

    def test_invalid_quantity_leaves_store_unchanged(self, store):
        with pytest.raises(ValidationError):
            store.add(Category.CABINETS, "B12 Base", 0)
        assert store.is_empty

    def test_unknown_name(self, store):
        with pytest.raises(CatalogLookupMiss):
            store.add(Category.COUNTERTOPS, "Marble", 10)
        assert store.is_empty

    def test_missing_selection(self, store):
        with pytest.raises(ValidationError):
            store.add(Category.CABINETS, "", 1)

    def test_vanity_with_addons(self, store):
        item = store.add(
            Category.VANITIES,
            VanitySelection(tier=Tier.GOOD, single_to_double=True, plumbing_wall_change=True),
            2,
        )

        assert item.base_price == 2150
        assert item.conversion_cost == 650
        assert item.plumbing_cost == 450
        assert item.line_total == pytest.approx(2 * 3250)

    def test_vanity_addon_off_costs_nothing(self, store):
        item = store.add(Category.VANITIES, VanitySelection(tier=Tier.BEST, plumbing_wall_change=True), 1)

        assert item.conversion_cost == 0.0
        assert item.unit_cost == 4650 + 450

    def test_kitchen_from_tier_name(self, store):
        item = store.add(Category.KITCHENS, "better", 1)

        assert item.tier is Tier.BETTER
        assert item.line_total == 12750

    def test_kitchen_upgrades(self, store):
        item = store.add(Category.KITCHENS, KitchenSelection(tier=Tier.GOOD, cabinet_upgrade=True, countertop_upgrade=True), 1)
        assert item.unit_cost == 9500 + 1850 + 2650

    def test_unknown_tier(self, store):
        with pytest.raises(ValidationError):
            store.add(Category.VANITIES, "platinum", 1)


class TestRemoveAndUndo:
    """Single-slot undo for removals"""

    def test_remove_shifts_items(self, store):
        for name in ("B12 Base", "B15 Base", "W3030 Wall"):
            store.add(Category.CABINETS, name, 1)

        removed = store.remove(Category.CABINETS, 1)

        assert removed.type == "B15 Base"
        assert _names(store, Category.CABINETS) == ["B12 Base", "W3030 Wall"]
        assert store.undo_entry.kind is UndoKind.REMOVE
        assert store.can_undo

    def test_undo_remove_appends_at_end(self, store):
        for name in ("B12 Base", "B15 Base", "W3030 Wall"):
            store.add(Category.CABINETS, name, 1)

        store.remove(Category.CABINETS, 0)
        store.undo()

        assert _names(store, Category.CABINETS) == ["B15 Base", "W3030 Wall", "B12 Base"]
        assert not store.can_undo

    def test_remove_out_of_range(self, store):
        store.add(Category.CABINETS, "B12 Base", 1)
        with pytest.raises(LineItemNotFound):
            store.remove(Category.CABINETS, 5)
        assert not store.can_undo

    def test_undo_empty_buffer(self, store):
        assert store.undo() is None

    def test_second_remove_overwrites_buffer(self, store):
        store.add(Category.CABINETS, "B12 Base", 1)
        store.add(Category.FLOORING, "Oak Laminate", 50)

        store.remove(Category.CABINETS, 0)
        store.remove(Category.FLOORING, 0)
        store.undo()

        assert store.count(Category.FLOORING) == 1
        assert store.count(Category.CABINETS) == 0
        assert store.undo() is None


class TestClearAndUndo:
    """Clearing whole categories"""

    def test_clear_and_restore_exact_order(self, store):
        for name in ("W3030 Wall", "B12 Base", "SB36 Sink Base"):
            store.add(Category.CABINETS, name, 2)

        cleared = store.clear(Category.CABINETS)
        assert len(cleared) == 3
        assert store.count(Category.CABINETS) == 0
        assert store.undo_entry.kind is UndoKind.CLEAR

        store.undo()
        assert _names(store, Category.CABINETS) == ["W3030 Wall", "B12 Base", "SB36 Sink Base"]

    def test_clear_empty_is_noop(self, store):
        store.add(Category.CABINETS, "B12 Base", 1)
        store.remove(Category.CABINETS, 0)

        store.clear(Category.FLOORING)

        assert store.undo_entry.kind is UndoKind.REMOVE

    def test_describe(self, store):
        store.add(Category.HARDWARE, "Round Knob", 4)
        store.add(Category.HARDWARE, "Bar Pull 5in", 4)
        assert describe(store.undo_entry) is None

        store.clear(Category.HARDWARE)
        assert describe(store.undo_entry) == "Undo clear Hardware (2 items)"


class TestUpdate:
    """Editing quantities"""

    def test_update_keeps_unit_price(self, store):
        store.add(Category.COUNTERTOPS, "Quartz", 10)
        updated = store.update(Category.COUNTERTOPS, 0, "14.5")

        assert updated.linear_feet == 14.5
        assert updated.unit_price_per_linear_ft == 85.0
        assert store.get(Category.COUNTERTOPS, 0) is updated

    def test_update_invalid_keeps_old_value(self, store):
        store.add(Category.CABINETS, "B12 Base", 4)

        with pytest.raises(ValidationError):
            store.update(Category.CABINETS, 0, "1.5")
        assert store.get(Category.CABINETS, 0).quantity == 4

    def test_update_not_undoable(self, store):
        store.add(Category.CABINETS, "B12 Base", 4)
        store.update(Category.CABINETS, 0, 6)
        assert not store.can_undo


class TestReplaceAll:
    """Trusted bulk loads"""

    def test_replace_all_bypasses_undo(self, store):
        store.add(Category.CABINETS, "B12 Base", 1)
        store.remove(Category.CABINETS, 0)

        store.replace_all(Category.CABINETS, [CabinetLineItem(type="Legacy Base", quantity=2, unit_price=99.0)])

        assert _names(store, Category.CABINETS) == ["Legacy Base"]
        assert store.undo_entry.kind is UndoKind.REMOVE

    def test_replace_all_type_checked(self, store):
        with pytest.raises(TypeError):
            store.replace_all(Category.FLOORING, [CabinetLineItem(type="B12 Base", quantity=1, unit_price=1.0)])

    def test_reset(self, store):
        store.add(Category.CABINETS, "B12 Base", 1)
        store.clear(Category.CABINETS)
        store.reset()

        assert store.is_empty
        assert not store.can_undo

    def test_snapshot_read_only(self, store):
        store.add(Category.CABINETS, "B12 Base", 1)
        snapshot = store.snapshot()

        with pytest.raises(TypeError):
            snapshot[Category.CABINETS] = ()
        assert len(snapshot) == len(Category)
