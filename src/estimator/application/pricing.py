"""
Kiosk Estimator - Pricing Engine

Pure function from the seven collections and the installation flag to a
totals breakdown. Nothing here is stored; totals are recomputed on demand.
"""
import logging
from typing import Mapping, Sequence

from estimator.domain.models import Category, CATEGORY_ORDER, LineItem, MarkupTier, NO_MARKUP, TotalsBreakdown
from estimator.domain.models.category import MARKUP_QUANTITY_CATEGORIES

logger = logging.getLogger(__name__)

DEFAULT_INSTALLATION_RATE = 0.15

SMALL_ORDER_MARKUP = MarkupTier(rate=0.45, label="Small Order Markup (45%)")
MEDIUM_ORDER_MARKUP = MarkupTier(rate=0.35, label="Medium Order Markup (35%)")
LARGE_ORDER_MARKUP = MarkupTier(rate=0.30, label="Large Order Markup (30%)")


def select_markup_tier(total_cabinet_quantity: int) -> MarkupTier:
    """
    Pick the markup tier for a combined cabinet + replacement-door count.

    Brackets are evaluated in this order: < 10 -> 45%, 12..15 -> 35%,
    >= 18 -> 30%. Everything else (10, 11, 16, 17) gets no markup.

    NOTE: the 10-11 and 16-17 gaps reproduce the observed production
    brackets literally. They are kept until product confirms the intended
    ranges.
    """
    if total_cabinet_quantity < 10:
        return SMALL_ORDER_MARKUP
    if 12 <= total_cabinet_quantity <= 15:
        return MEDIUM_ORDER_MARKUP
    if total_cabinet_quantity >= 18:
        return LARGE_ORDER_MARKUP
    return NO_MARKUP


def category_subtotal(items: Sequence[LineItem]) -> float:
    """Sum of line totals for one category."""
    return sum((item.line_total for item in items), 0.0)


def cabinet_quantity(collections: Mapping[Category, Sequence[LineItem]]) -> int:
    """Units across cabinets and replacement doors combined."""
    return sum(
        int(item.measure)
        for category in MARKUP_QUANTITY_CATEGORIES
        for item in collections.get(category, ())
    )


def compute_totals(
    collections: Mapping[Category, Sequence[LineItem]],
    installation_requested: bool,
    installation_rate: float = DEFAULT_INSTALLATION_RATE,
) -> TotalsBreakdown:
    """
    Compute the totals breakdown for an estimate.

    Markup is applied to the materials subtotal. Installation is costed on
    the same pre-markup subtotal.

    Args:
        collections: Items per category (missing categories count as empty)
        installation_requested: Whether installation is included
        installation_rate: Fraction of the subtotal charged for installation

    Returns:
        TotalsBreakdown
    """
    subtotals = {c: category_subtotal(collections.get(c, ())) for c in CATEGORY_ORDER}
    line_counts = {c: len(collections.get(c, ())) for c in CATEGORY_ORDER}

    total_qty = cabinet_quantity(collections)
    markup = select_markup_tier(total_qty)

    subtotal = sum(subtotals.values(), 0.0)
    markup_amount = subtotal * markup.rate
    installation_cost = subtotal * installation_rate if installation_requested else 0.0
    grand_total = subtotal + markup_amount + installation_cost

    logger.debug(
        f"Totals: subtotal={subtotal:.2f}, cabinet_qty={total_qty}, "
        f"markup={markup.rate:.0%}, installation={installation_cost:.2f}, grand={grand_total:.2f}"
    )

    return TotalsBreakdown(
        category_subtotals=subtotals,
        total_cabinet_quantity=total_qty,
        markup=markup,
        subtotal=subtotal,
        markup_amount=markup_amount,
        installation_requested=installation_requested,
        installation_cost=installation_cost,
        grand_total=grand_total,
        installation_rate=installation_rate,
        line_counts=line_counts,
    )
