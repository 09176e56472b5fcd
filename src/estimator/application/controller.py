"""
Kiosk Estimator - Estimate Controller

Single owner of an estimate's state: the line-item store, the edit cursor,
the installation flag and the per-category input drafts. Its methods are
the only mutation surface, so the whole edit flow can be driven without a
UI.
"""
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Iterable

from estimator.domain.exceptions import ValidationError
from estimator.domain.interfaces import CatalogReference
from estimator.domain.models import (
    Category,
    CATEGORY_ORDER,
    TAB_ORDER,
    EstimateRecord,
    LineItem,
    Selection,
    TotalsBreakdown,
)
from .importer import CabinetImportMatcher, ImportEntry, ImportReport
from .pricing import DEFAULT_INSTALLATION_RATE, compute_totals
from .store import LineItemStore
from .undo import UndoEntry, describe

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    """Keyboard navigation between editable cells."""

    UP = "up"
    DOWN = "down"
    TAB_FORWARD = "tab"
    TAB_BACKWARD = "shift+tab"


@dataclass(frozen=True)
class EditCursor:
    """
    The one line item currently open for inline editing.

    pending_value is whatever the user has typed so far; the store is not
    touched until the edit is committed.
    """

    category: Category
    index: int
    pending_value: Any
    original_value: float


class EstimateController:
    """
    Edit/undo state machine over an estimate.

    Idle when cursor is None, editing otherwise. Two commit paths exist on
    purpose: commit() rejects invalid input and stays in edit mode, while
    moving to another cell saves silently and drops invalid input.
    """

    def __init__(
        self,
        catalog: CatalogReference,
        installation_rate: float = DEFAULT_INSTALLATION_RATE,
        import_matcher: CabinetImportMatcher | None = None,
    ):
        """
        Initialize EstimateController.

        Args:
            catalog: Price source for new line items
            installation_rate: Installation fraction of the materials subtotal
            import_matcher: Matcher for bulk cabinet import (default: built from catalog)
        """
        self.store = LineItemStore(catalog)
        self.installation_rate = installation_rate
        self.import_matcher = import_matcher or CabinetImportMatcher(catalog)
        self.installation_requested = False
        self._cursor: EditCursor | None = None
        self._inputs: dict[Category, str] = {c: "" for c in CATEGORY_ORDER}

    # State

    @property
    def cursor(self) -> EditCursor | None:
        return self._cursor

    @property
    def is_editing(self) -> bool:
        return self._cursor is not None

    @property
    def can_undo(self) -> bool:
        return self.store.can_undo

    @property
    def undo_entry(self) -> UndoEntry:
        return self.store.undo_entry

    def undo_description(self) -> str | None:
        return describe(self.store.undo_entry)

    def items(self, category: Category) -> tuple[LineItem, ...]:
        return self.store.items(category)

    def totals(self) -> TotalsBreakdown:
        """Totals for the current items; derived on every call."""
        return compute_totals(self.store.snapshot(), self.installation_requested, self.installation_rate)

    def set_installation_requested(self, requested: bool) -> None:
        self.installation_requested = bool(requested)

    # Input drafts

    def set_input(self, category: Category, value: Any) -> None:
        """Record what is typed in a category's quantity field."""
        self._inputs[category] = "" if value is None else str(value)

    def input_value(self, category: Category) -> str:
        return self._inputs[category]

    # Store operations

    def add(self, category: Category, selection: Selection, raw_quantity: Any = None) -> LineItem:
        """
        Add a line item and clear the category's input field.

        Args:
            category: Target category
            selection: Catalog entry name or tier selection
            raw_quantity: Quantity/measurement; defaults to the input draft

        Raises:
            ValidationError: If the quantity is out of bounds (input kept)
            CatalogLookupMiss: If the selection is not in the catalog (input kept)
        """
        value = self._inputs[category] if raw_quantity is None else raw_quantity
        item = self.store.add(category, selection, value)
        self._inputs[category] = ""
        return item

    def remove(self, category: Category, index: int) -> LineItem:
        """Remove one item; it becomes the undo entry."""
        self._drop_edit_in(category)
        return self.store.remove(category, index)

    def clear(self, category: Category) -> tuple[LineItem, ...]:
        """Clear a category; its items become the undo entry."""
        self._drop_edit_in(category)
        return self.store.clear(category)

    def update(self, category: Category, index: int, new_value: Any) -> LineItem:
        """Direct quantity/measurement update (not undoable)."""
        return self.store.update(category, index, new_value)

    def undo(self) -> tuple[LineItem, ...] | None:
        """
        Restore the last remove/clear.

        Returns:
            Restored items, or None when the buffer is empty (no-op)
        """
        entry = self.store.undo_entry
        if entry.kind is None:
            logger.debug("Undo requested with empty buffer")
            return None
        self._drop_edit_in(entry.category)
        return self.store.undo()

    def reset(self) -> None:
        """Start a fresh estimate."""
        self._cursor = None
        self.store.reset()
        self._inputs = {c: "" for c in CATEGORY_ORDER}
        self.installation_requested = False

    # Edit flow

    def start_edit(self, category: Category, index: int) -> EditCursor:
        """
        Open an item for editing.

        An edit already open elsewhere is committed first; if its pending
        value is invalid it is dropped silently and that item keeps its
        original value.

        Raises:
            LineItemNotFound: If the target does not exist
        """
        target = self.store.get(category, index)
        current = self._cursor
        if current is not None:
            if current.category == category and current.index == index:
                return current
            self._commit_on_switch()

        self._cursor = EditCursor(
            category=category,
            index=index,
            pending_value=target.measure,
            original_value=target.measure,
        )
        logger.debug(f"Editing {category.value}[{index}]")
        return self._cursor

    def type_value(self, value: Any) -> EditCursor | None:
        """Update the pending value. No store mutation."""
        if self._cursor is None:
            return None
        self._cursor = replace(self._cursor, pending_value=value)
        return self._cursor

    def commit(self) -> LineItem | None:
        """
        Save the pending value (Enter key).

        Returns:
            The updated item, or None when idle

        Raises:
            ValidationError: If the pending value is invalid; the edit stays open
        """
        cursor = self._cursor
        if cursor is None:
            return None
        updated = self.store.update(cursor.category, cursor.index, cursor.pending_value)
        self._cursor = None
        return updated

    def cancel(self) -> float | None:
        """
        Discard the pending value (Escape key).

        Returns:
            The value the cell reverts to, or None when idle
        """
        cursor = self._cursor
        self._cursor = None
        if cursor is None:
            return None
        logger.debug(f"Cancelled edit of {cursor.category.value}[{cursor.index}]")
        return cursor.original_value

    def navigate(self, direction: Direction) -> EditCursor | None:
        """
        Move the edit cursor.

        Up/down stay inside the current category. Tab moves through the
        cabinet -> flooring -> countertop cycle, jumping to the first (or,
        backwards, last) item of the next non-empty category at a boundary.
        When there is nowhere to go the cursor stays where it is.

        Returns:
            The cursor after the move (None when idle)
        """
        cursor = self._cursor
        if cursor is None:
            return None

        target = self._navigation_target(cursor, Direction(direction))
        if target is None:
            # Nowhere to go: the edit stays open, pending value uncommitted
            return cursor
        return self.start_edit(*target)

    def _navigation_target(self, cursor: EditCursor, direction: Direction) -> tuple[Category, int] | None:
        category, index = cursor.category, cursor.index
        count = self.store.count(category)

        if direction is Direction.UP:
            return (category, index - 1) if index > 0 else None
        if direction is Direction.DOWN:
            return (category, index + 1) if index + 1 < count else None

        forward = direction is Direction.TAB_FORWARD
        if forward and index + 1 < count:
            return category, index + 1
        if not forward and index > 0:
            return category, index - 1
        if category not in TAB_ORDER:
            return None

        position = TAB_ORDER.index(category)
        step = 1 if forward else -1
        for offset in range(1, len(TAB_ORDER)):
            candidate = TAB_ORDER[(position + step * offset) % len(TAB_ORDER)]
            size = self.store.count(candidate)
            if size:
                return candidate, (0 if forward else size - 1)
        return None

    def _commit_on_switch(self) -> None:
        cursor = self._cursor
        self._cursor = None
        if cursor is None:
            return
        try:
            self.store.update(cursor.category, cursor.index, cursor.pending_value)
        except ValidationError as e:
            logger.info(f"Discarded invalid edit of {cursor.category.value}[{cursor.index}]: {e.message}")

    def _drop_edit_in(self, category: Category) -> None:
        # Indices in this category are about to change
        if self._cursor is not None and self._cursor.category == category:
            self.cancel()

    # Loading / saving

    def load_record(self, record: EstimateRecord) -> None:
        """
        Replace every collection with a saved estimate's items.

        Bypasses validation and undo; the undo buffer is emptied since it
        refers to the estimate being replaced.
        """
        self._cursor = None
        for category in CATEGORY_ORDER:
            self.store.replace_all(category, record.items.get(category, ()))
        self.store.discard_undo()
        self.installation_requested = record.installation_requested
        logger.info(f"Loaded estimate {record.estimate_id or '(unsaved)'} with {record.item_count()} items")

    def to_record(self, estimate_id: str | None = None) -> EstimateRecord:
        """Snapshot the current estimate in its persisted shape."""
        return EstimateRecord.build(self.store.snapshot(), self.totals(), estimate_id=estimate_id)

    def import_cabinets(self, entries: Iterable[ImportEntry]) -> ImportReport:
        """
        Match {name, quantity} pairs against the cabinet catalog and load them.

        Matched items replace the cabinet collection; unmatched and rejected
        entries are reported back.
        """
        report = self.import_matcher.match(entries)
        self._drop_edit_in(Category.CABINETS)
        self.store.replace_all(Category.CABINETS, report.matched)
        # A buffered remove/clear would restore the cabinets the import replaced
        self.store.discard_undo()
        return report
