"""
Kiosk Estimator - Catalog Reference Models

Values handed out by the catalog when a line item is added.
"""
from dataclasses import dataclass

from .category import Category, Tier


@dataclass(frozen=True)
class CatalogPrice:
    """
    Price list entry for a simple (non-tiered) category.

    Immutable value object; the store copies unit_price onto the line item.
    """

    name: str
    unit_price: float
    image_ref: str | None = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Catalog entry name cannot be empty")
        if self.unit_price < 0:
            raise ValueError(f"Unit price cannot be negative: {self.unit_price}")


@dataclass(frozen=True)
class VanitySelection:
    """What the user picked for a vanity package."""

    tier: Tier
    single_to_double: bool = False
    plumbing_wall_change: bool = False


@dataclass(frozen=True)
class KitchenSelection:
    """What the user picked for a kitchen package."""

    tier: Tier
    cabinet_upgrade: bool = False
    countertop_upgrade: bool = False


# Catalog entry name for simple categories, package selection for tiered ones
Selection = str | VanitySelection | KitchenSelection

SIMPLE_CATEGORIES: tuple[Category, ...] = (
    Category.CABINETS,
    Category.REPLACEMENT_DOORS,
    Category.FLOORING,
    Category.COUNTERTOPS,
    Category.HARDWARE,
)
