"""Kiosk Estimator - Domain Models."""

from .category import Category, CategorySpec, Tier, CATEGORY_ORDER, CATEGORY_SPECS, TAB_ORDER
from .tiers import TierPricing, VanityAddOns, KitchenAddOns, get_tier
from .catalog import CatalogPrice, VanitySelection, KitchenSelection, Selection
from .line_item import (
    LineItem,
    CabinetLineItem,
    ReplacementDoorLineItem,
    FlooringLineItem,
    CountertopLineItem,
    HardwareLineItem,
    VanityLineItem,
    KitchenLineItem,
    line_item_from_dict,
)
from .totals import MarkupTier, TotalsBreakdown, NO_MARKUP
from .estimate import EstimateRecord

__all__ = [
    # Category
    "Category",
    "CategorySpec",
    "Tier",
    "CATEGORY_ORDER",
    "CATEGORY_SPECS",
    "TAB_ORDER",
    # Tiers
    "TierPricing",
    "VanityAddOns",
    "KitchenAddOns",
    "get_tier",
    # Catalog
    "CatalogPrice",
    "VanitySelection",
    "KitchenSelection",
    "Selection",
    # Line items
    "LineItem",
    "CabinetLineItem",
    "ReplacementDoorLineItem",
    "FlooringLineItem",
    "CountertopLineItem",
    "HardwareLineItem",
    "VanityLineItem",
    "KitchenLineItem",
    "line_item_from_dict",
    # Totals
    "MarkupTier",
    "TotalsBreakdown",
    "NO_MARKUP",
    # Estimate
    "EstimateRecord",
]
