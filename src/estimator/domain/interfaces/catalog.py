"""
Kiosk Estimator - Catalog Reference Protocol Interface

Read-only price lists supplied by the external catalog service.
"""
from typing import Protocol

from estimator.domain.models import CatalogPrice, Category, Tier, TierPricing, VanityAddOns, KitchenAddOns


class CatalogReference(Protocol):
    """
    Protocol for catalog/price lookup implementations.

    Prices returned here are snapshotted onto line items at add time, so
    later catalog edits never change an existing estimate.
    """

    def lookup_price(self, category: Category, name: str) -> CatalogPrice:
        """
        Look up the unit price for a simple-category entry.

        Args:
            category: Cabinets, replacement doors, flooring, countertops or hardware
            name: Catalog entry name

        Returns:
            CatalogPrice

        Raises:
            CatalogLookupMiss: If the name is not in the category's price list
        """
        ...

    def lookup_tier_pricing(self, category: Category, tier: Tier) -> TierPricing:
        """
        Look up base pricing for a vanity/kitchen tier.

        Raises:
            CatalogLookupMiss: If the category is not tiered or the tier is missing
        """
        ...

    def vanity_addons(self, tier: Tier) -> VanityAddOns:
        """Per-unit vanity add-on costs for a tier."""
        ...

    def kitchen_addons(self, tier: Tier) -> KitchenAddOns:
        """Per-unit kitchen upgrade costs for a tier."""
        ...

    def names(self, category: Category) -> list[str]:
        """Entry names for a simple category, in catalog order."""
        ...
