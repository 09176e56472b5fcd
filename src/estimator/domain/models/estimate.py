"""
Kiosk Estimator - Persisted Estimate Record

Shape exchanged with persistence at the store boundary.
"""
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from .category import Category, CATEGORY_ORDER
from .line_item import LineItem, line_item_from_dict
from .totals import TotalsBreakdown


@dataclass(frozen=True)
class EstimateRecord:
    """
    Saved estimate: raw line items plus the totals computed when it was saved.

    Totals are informational on load; the engine always recomputes them from
    the items.
    """

    items: dict[Category, tuple[LineItem, ...]]
    category_totals: dict[Category, float]
    grand_total: float
    installation_requested: bool
    installation_cost: float
    subtotal: float = 0.0
    markup_amount: float = 0.0
    markup_label: str | None = None
    estimate_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Every category present, as tuples (immutable)
        items = {c: tuple(self.items.get(c, ())) for c in CATEGORY_ORDER}
        object.__setattr__(self, "items", items)

    @classmethod
    def build(
        cls,
        collections: Mapping[Category, Sequence[LineItem]],
        totals: TotalsBreakdown,
        estimate_id: str | None = None,
    ) -> "EstimateRecord":
        """Create a record from the current collections and their totals."""
        return cls(
            items={c: tuple(collections.get(c, ())) for c in CATEGORY_ORDER},
            category_totals={c: totals.subtotal_for(c) for c in CATEGORY_ORDER},
            grand_total=totals.grand_total,
            installation_requested=totals.installation_requested,
            installation_cost=totals.installation_cost,
            subtotal=totals.subtotal,
            markup_amount=totals.markup_amount,
            markup_label=totals.markup_label,
            estimate_id=estimate_id,
        )

    def item_count(self) -> int:
        return sum(len(v) for v in self.items.values())

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted dict shape (items, per-category totals, summary)."""
        data: dict[str, Any] = {}
        for category in CATEGORY_ORDER:
            spec = category.spec
            data[spec.record_key] = [item.to_dict() for item in self.items[category]]
        for category in CATEGORY_ORDER:
            data[category.spec.total_key] = self.category_totals.get(category, 0.0)
        data.update({
            "subtotal": self.subtotal,
            "markup_amount": self.markup_amount,
            "markup_label": self.markup_label,
            "grand_total": self.grand_total,
            "installation_requested": self.installation_requested,
            "installation_cost": self.installation_cost,
        })
        if self.estimate_id is not None:
            data["id"] = self.estimate_id
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "EstimateRecord":
        """
        Create EstimateRecord from a persisted dict.

        Missing categories load as empty (older records have no
        replacement-door column).

        Raises:
            ValueError: If an item cannot be rebuilt
        """
        items: dict[Category, tuple[LineItem, ...]] = {}
        totals: dict[Category, float] = {}
        for category in CATEGORY_ORDER:
            spec = category.spec
            raw_items = data.get(spec.record_key) or []
            items[category] = tuple(line_item_from_dict(category, raw) for raw in raw_items)
            totals[category] = float(data.get(spec.total_key) or 0.0)

        estimate_id = data.get("id")
        return cls(
            items=items,
            category_totals=totals,
            grand_total=float(data.get("grand_total") or 0.0),
            installation_requested=bool(data.get("installation_requested", False)),
            installation_cost=float(data.get("installation_cost") or 0.0),
            subtotal=float(data.get("subtotal") or 0.0),
            markup_amount=float(data.get("markup_amount") or 0.0),
            markup_label=data.get("markup_label"),
            estimate_id=str(estimate_id) if estimate_id is not None else None,
        )
