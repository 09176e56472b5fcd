"""
Kiosk Estimator - Single-Slot Undo Buffer

Holds the most recent destructive operation only. A new remove/clear
overwrites whatever was captured before.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Union

from estimator.domain.models import Category, LineItem


class UndoKind(str, Enum):
    """Destructive operation captured in the buffer."""

    REMOVE = "remove"
    CLEAR = "clear"


@dataclass(frozen=True)
class EmptyUndo:
    """Nothing to undo."""

    kind: None = None


@dataclass(frozen=True)
class RemoveUndo:
    """Single item removed; undo re-appends it to the end of the category."""

    category: Category
    snapshot: tuple[LineItem, ...]
    index: int
    kind: UndoKind = UndoKind.REMOVE


@dataclass(frozen=True)
class ClearUndo:
    """Whole category cleared; undo restores the exact prior sequence."""

    category: Category
    snapshot: tuple[LineItem, ...]
    kind: UndoKind = UndoKind.CLEAR


UndoEntry = Union[EmptyUndo, RemoveUndo, ClearUndo]

EMPTY_UNDO = EmptyUndo()


def describe(entry: UndoEntry) -> str | None:
    """Short text for an undo button tooltip, or None when empty."""
    if isinstance(entry, RemoveUndo):
        return f"Undo remove {entry.snapshot[0].label} from {entry.category.label}"
    if isinstance(entry, ClearUndo):
        return f"Undo clear {entry.category.label} ({len(entry.snapshot)} items)"
    return None
