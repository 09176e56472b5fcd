"""
Kiosk Estimator - Line-Item Store

Seven independent ordered collections plus the single-slot undo buffer.
Every mutation is synchronous and all-or-nothing.
"""
import logging
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from estimator.domain.exceptions import LineItemNotFound, ValidationError
from estimator.domain.interfaces import CatalogReference
from estimator.domain.models import (
    Category,
    CATEGORY_ORDER,
    LineItem,
    CabinetLineItem,
    ReplacementDoorLineItem,
    FlooringLineItem,
    CountertopLineItem,
    HardwareLineItem,
    VanityLineItem,
    KitchenLineItem,
    VanitySelection,
    KitchenSelection,
    Selection,
    Tier,
    get_tier,
)
from estimator.domain.models.line_item import LINE_ITEM_TYPES
from .undo import EMPTY_UNDO, ClearUndo, RemoveUndo, UndoEntry
from .validation import validate

logger = logging.getLogger(__name__)


class LineItemStore:
    """
    Ordered line-item collections, one per category.

    Order is insertion order and is user-visible. Items are frozen records;
    update() swaps in a copy with the new quantity/measurement.
    """

    def __init__(self, catalog: CatalogReference):
        """
        Initialize LineItemStore.

        Args:
            catalog: Price source used when items are added
        """
        self.catalog = catalog
        self._items: dict[Category, list[LineItem]] = {c: [] for c in CATEGORY_ORDER}
        self._undo: UndoEntry = EMPTY_UNDO

    # Read access

    def items(self, category: Category) -> tuple[LineItem, ...]:
        """Items of one category, in insertion order."""
        return tuple(self._items[category])

    def get(self, category: Category, index: int) -> LineItem:
        """
        Get a single item.

        Raises:
            LineItemNotFound: If index is out of range
        """
        self._check_index(category, index)
        return self._items[category][index]

    def count(self, category: Category) -> int:
        return len(self._items[category])

    def snapshot(self) -> Mapping[Category, tuple[LineItem, ...]]:
        """Read-only view of all seven collections (for pricing, export, persistence)."""
        return MappingProxyType({c: tuple(self._items[c]) for c in CATEGORY_ORDER})

    @property
    def is_empty(self) -> bool:
        return not any(self._items.values())

    @property
    def undo_entry(self) -> UndoEntry:
        return self._undo

    @property
    def can_undo(self) -> bool:
        return self._undo.kind is not None

    # Mutations

    def add(self, category: Category, selection: Selection, raw_quantity: Any) -> LineItem:
        """
        Validate, price and append a new line item.

        Args:
            category: Target category
            selection: Catalog entry name, or a VanitySelection/KitchenSelection
            raw_quantity: Quantity/measurement as entered

        Returns:
            The appended LineItem

        Raises:
            ValidationError: If the quantity/measurement is out of bounds
            CatalogLookupMiss: If the selection is no longer in the catalog
        """
        value = validate(category, raw_quantity)
        item = self._build_item(category, selection, value)
        self._items[category].append(item)
        logger.debug(f"Added {category.value} item '{item.label}' x {value} (line total {item.line_total:.2f})")
        return item

    def remove(self, category: Category, index: int) -> LineItem:
        """
        Delete the item at index; later items shift down.

        The removed item becomes the undo buffer's only entry.

        Raises:
            LineItemNotFound: If index is out of range
        """
        self._check_index(category, index)
        removed = self._items[category].pop(index)
        self._undo = RemoveUndo(category=category, snapshot=(removed,), index=index)
        logger.debug(f"Removed {category.value}[{index}] '{removed.label}'")
        return removed

    def clear(self, category: Category) -> tuple[LineItem, ...]:
        """
        Empty a category, capturing its prior contents for undo.

        Clearing an already-empty category changes nothing, including the
        undo buffer.
        """
        removed = tuple(self._items[category])
        if not removed:
            return removed
        self._items[category] = []
        self._undo = ClearUndo(category=category, snapshot=removed)
        logger.info(f"Cleared {category.value} ({len(removed)} items)")
        return removed

    def update(self, category: Category, index: int, new_value: Any) -> LineItem:
        """
        Replace the quantity/measurement of one item.

        Re-validates with the same bounds as add(). Price fields are left as
        they were snapshotted. Edits are not undoable.

        Raises:
            LineItemNotFound: If index is out of range
            ValidationError: If new_value is out of bounds
        """
        current = self.get(category, index)
        value = validate(category, new_value)
        updated = current.with_measure(value)
        self._items[category][index] = updated
        logger.debug(f"Updated {category.value}[{index}] {current.measure} -> {value}")
        return updated

    def replace_all(self, category: Category, items: Iterable[LineItem]) -> None:
        """
        Swap in a whole collection (loading a saved estimate or an import).

        Trusted input: bypasses validation and the undo buffer.
        """
        expected = LINE_ITEM_TYPES[category]
        new_items = list(items)
        for item in new_items:
            if type(item) is not expected:
                raise TypeError(f"{category.value} expects {expected.__name__}, got {type(item).__name__}")
        self._items[category] = new_items
        logger.debug(f"Replaced {category.value} with {len(new_items)} items")

    def reset(self) -> None:
        """Empty every category and drop the undo buffer (estimate-level reset)."""
        self._items = {c: [] for c in CATEGORY_ORDER}
        self._undo = EMPTY_UNDO

    def discard_undo(self) -> None:
        self._undo = EMPTY_UNDO

    def undo(self) -> tuple[LineItem, ...] | None:
        """
        Restore the last remove/clear.

        A removed item is re-appended at the end of its category, not put
        back at its old index. A cleared category gets its exact prior
        sequence back. The buffer is consumed.

        Returns:
            Restored items, or None when there was nothing to undo
        """
        entry = self._undo
        if isinstance(entry, RemoveUndo):
            self._items[entry.category].extend(entry.snapshot)
        elif isinstance(entry, ClearUndo):
            self._items[entry.category] = list(entry.snapshot)
        else:
            return None

        self._undo = EMPTY_UNDO
        logger.info(f"Undid {entry.kind.value} on {entry.category.value} ({len(entry.snapshot)} items)")
        return entry.snapshot

    # Helpers

    def _check_index(self, category: Category, index: int) -> None:
        size = len(self._items[category])
        if not isinstance(index, int) or isinstance(index, bool) or not (0 <= index < size):
            raise LineItemNotFound(
                f"No {category.label.lower()} item at position {index}",
                category=category.value,
                index=index,
            )

    def _build_item(self, category: Category, selection: Selection, value: int | float) -> LineItem:
        if category is Category.VANITIES:
            return self._build_vanity(selection, value)
        if category is Category.KITCHENS:
            return self._build_kitchen(selection, value)

        if not isinstance(selection, str) or not selection.strip():
            raise ValidationError(f"{category.label}: please choose a type", field_name="type", value=selection)
        price = self.catalog.lookup_price(category, selection.strip())

        if category is Category.CABINETS:
            return CabinetLineItem(type=price.name, quantity=value, unit_price=price.unit_price)
        if category is Category.REPLACEMENT_DOORS:
            return ReplacementDoorLineItem(type=price.name, quantity=value, unit_price=price.unit_price)
        if category is Category.FLOORING:
            return FlooringLineItem(type=price.name, square_feet=value, unit_price_per_sqft=price.unit_price)
        if category is Category.COUNTERTOPS:
            return CountertopLineItem(type=price.name, linear_feet=value, unit_price_per_linear_ft=price.unit_price)
        return HardwareLineItem(type=price.name, quantity=value, unit_price=price.unit_price, image_ref=price.image_ref)

    def _selection_tier(self, category: Category, selection: Any) -> Tier:
        raw = getattr(selection, "tier", selection)
        try:
            return get_tier(raw)
        except ValueError as e:
            raise ValidationError(f"{category.label}: {e}", field_name="tier", value=raw)

    def _build_vanity(self, selection: Any, quantity: int) -> VanityLineItem:
        tier = self._selection_tier(Category.VANITIES, selection)
        if not isinstance(selection, VanitySelection):
            selection = VanitySelection(tier=tier)
        pricing = self.catalog.lookup_tier_pricing(Category.VANITIES, tier)
        addons = self.catalog.vanity_addons(tier)
        return VanityLineItem(
            tier=tier,
            quantity=quantity,
            base_price=pricing.base,
            single_to_double=selection.single_to_double,
            plumbing_wall_change=selection.plumbing_wall_change,
            conversion_cost=addons.single_to_double if selection.single_to_double else 0.0,
            plumbing_cost=addons.plumbing_wall_change if selection.plumbing_wall_change else 0.0,
        )

    def _build_kitchen(self, selection: Any, quantity: int) -> KitchenLineItem:
        tier = self._selection_tier(Category.KITCHENS, selection)
        if not isinstance(selection, KitchenSelection):
            selection = KitchenSelection(tier=tier)
        pricing = self.catalog.lookup_tier_pricing(Category.KITCHENS, tier)
        addons = self.catalog.kitchen_addons(tier)
        return KitchenLineItem(
            tier=tier,
            quantity=quantity,
            base_price=pricing.base,
            cabinet_upgrade=selection.cabinet_upgrade,
            countertop_upgrade=selection.countertop_upgrade,
            cabinet_cost=addons.cabinet_upgrade if selection.cabinet_upgrade else 0.0,
            countertop_cost=addons.countertop_upgrade if selection.countertop_upgrade else 0.0,
        )
