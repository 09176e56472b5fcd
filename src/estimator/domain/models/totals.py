"""
Kiosk Estimator - Totals Domain Model

Output of the pricing engine, consumed verbatim by the UI summary,
document export and persistence.
"""
from dataclasses import dataclass, field
from typing import Any

from .category import Category, CATEGORY_ORDER


@dataclass(frozen=True)
class MarkupTier:
    """Quantity-dependent markup rate with its display label (None at 0%)."""

    rate: float
    label: str | None = None

    @property
    def applies(self) -> bool:
        return self.rate > 0


NO_MARKUP = MarkupTier(rate=0.0, label=None)


@dataclass(frozen=True)
class TotalsBreakdown:
    """
    Derived totals for one estimate.

    Immutable; recomputed from the line items on every change, never stored
    as the source of truth.
    """

    category_subtotals: dict[Category, float]
    total_cabinet_quantity: int
    markup: MarkupTier
    subtotal: float
    markup_amount: float
    installation_requested: bool
    installation_cost: float
    grand_total: float
    installation_rate: float = 0.15
    line_counts: dict[Category, int] = field(default_factory=dict)

    def subtotal_for(self, category: Category) -> float:
        return self.category_subtotals.get(category, 0.0)

    @property
    def markup_label(self) -> str | None:
        return self.markup.label

    @property
    def markup_rate(self) -> float:
        return self.markup.rate

    @property
    def is_empty(self) -> bool:
        return not any(self.line_counts.values())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict (for JSON serialization)."""
        return {
            "category_subtotals": {
                c.value: self.subtotal_for(c) for c in CATEGORY_ORDER
            },
            "total_cabinet_quantity": self.total_cabinet_quantity,
            "markup_rate": self.markup.rate,
            "markup_label": self.markup.label,
            "subtotal": self.subtotal,
            "markup_amount": self.markup_amount,
            "installation_requested": self.installation_requested,
            "installation_cost": self.installation_cost,
            "grand_total": self.grand_total,
        }
