"""
Kiosk Estimator - In-Memory Catalog

Implementation of CatalogReference protocol backed by dicts, loadable from
a CSV/Excel price list.
"""
import logging
import os
from io import BytesIO
from typing import BinaryIO, Mapping

import pandas as pd

from estimator.domain.exceptions import CatalogLookupMiss, ImportParsingError
from estimator.domain.models import CatalogPrice, Category, Tier, TierPricing, VanityAddOns, KitchenAddOns
from estimator.domain.models.catalog import SIMPLE_CATEGORIES
from estimator.domain.models.tiers import DEFAULT_TIER_PRICING, VANITY_ADDONS, KITCHEN_ADDONS

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("category", "name", "unit_price")


class InMemoryCatalog:
    """
    Read-only price lists per category.

    Name lookups are exact after trimming, falling back to a
    case-insensitive match.
    """

    def __init__(
        self,
        prices: Mapping[Category, list[CatalogPrice]] | None = None,
        tier_pricing: Mapping[Category, Mapping[Tier, TierPricing]] | None = None,
        vanity_addons: Mapping[Tier, VanityAddOns] | None = None,
        kitchen_addons: Mapping[Tier, KitchenAddOns] | None = None,
    ):
        """
        Initialize InMemoryCatalog.

        Args:
            prices: Price entries per simple category (catalog order kept)
            tier_pricing: Vanity/kitchen tier tables (default: standard tables)
            vanity_addons: Vanity add-on costs per tier
            kitchen_addons: Kitchen upgrade costs per tier
        """
        self._prices: dict[Category, dict[str, CatalogPrice]] = {c: {} for c in SIMPLE_CATEGORIES}
        for category, entries in (prices or {}).items():
            if category not in self._prices:
                raise ValueError(f"{category.value} is priced from tier tables, not a price list")
            for entry in entries:
                self._prices[category][entry.name] = entry
        self._tiers = {c: dict(t) for c, t in (tier_pricing or DEFAULT_TIER_PRICING).items()}
        self._vanity_addons = dict(vanity_addons or VANITY_ADDONS)
        self._kitchen_addons = dict(kitchen_addons or KITCHEN_ADDONS)

    @classmethod
    def from_simple(cls, prices: Mapping[Category, Mapping[str, float]]) -> "InMemoryCatalog":
        """Build from {category: {name: unit_price}}."""
        return cls({
            category: [CatalogPrice(name=name, unit_price=float(price)) for name, price in entries.items()]
            for category, entries in prices.items()
        })

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> "InMemoryCatalog":
        """
        Build from a table with columns category, name, unit_price[, image_ref].

        Raises:
            ImportParsingError: If required columns are missing or a row is invalid
        """
        columns = {str(c).strip().lower(): c for c in df.columns}
        missing = [c for c in REQUIRED_COLUMNS if c not in columns]
        if missing:
            raise ImportParsingError(f"Price list is missing columns: {', '.join(missing)}")

        prices: dict[Category, list[CatalogPrice]] = {}
        for row_idx, row in df.iterrows():
            raw_category = str(row[columns["category"]]).strip().lower()
            try:
                category = Category(raw_category)
            except ValueError:
                raise ImportParsingError(f"Unknown category '{raw_category}'", row=int(row_idx) + 2)
            image = row[columns["image_ref"]] if "image_ref" in columns else None
            try:
                entry = CatalogPrice(
                    name=str(row[columns["name"]]).strip(),
                    unit_price=float(row[columns["unit_price"]]),
                    image_ref=str(image).strip() if image is not None and pd.notna(image) else None,
                )
            except (TypeError, ValueError) as e:
                raise ImportParsingError(f"Invalid price list row: {e}", row=int(row_idx) + 2)
            prices.setdefault(category, []).append(entry)

        catalog = cls(prices)
        logger.info(f"✅ Loaded price list: {sum(len(v) for v in prices.values())} entries")
        return catalog

    @classmethod
    def from_file(cls, file: str | BinaryIO, file_name: str | None = None) -> "InMemoryCatalog":
        """
        Load a CSV or Excel price list.

        Args:
            file: Path or binary file object
            file_name: Name used to pick the format when file is a stream
        """
        name = file_name or (file if isinstance(file, str) else "")
        ext = os.path.splitext(name)[1].lower()
        try:
            if isinstance(file, str):
                source = file
            else:
                content = file.read()
                source = BytesIO(content)
            if ext in (".xlsx", ".xlsm", ".xls"):
                df = pd.read_excel(source, engine="openpyxl")
            else:
                df = pd.read_csv(source)
        except Exception as e:
            logger.error(f"Price list loading failed: {e}", exc_info=True)
            raise ImportParsingError(f"Failed to read price list: {e}", file_name=name or None)
        return cls.from_dataframe(df)

    # CatalogReference

    def lookup_price(self, category: Category, name: str) -> CatalogPrice:
        entries = self._prices.get(category)
        if entries is None:
            raise CatalogLookupMiss(f"{category.label} are not sold from the price list", category=category.value, name=name)

        key = name.strip()
        if key in entries:
            return entries[key]
        folded = key.lower()
        for entry_name, entry in entries.items():
            if entry_name.lower() == folded:
                return entry
        raise CatalogLookupMiss(f"'{name}' is no longer in the {category.label.lower()} catalog", category=category.value, name=name)

    def lookup_tier_pricing(self, category: Category, tier: Tier) -> TierPricing:
        table = self._tiers.get(category)
        if table is None or tier not in table:
            raise CatalogLookupMiss(f"No {tier.value} tier pricing for {category.label.lower()}", category=category.value, name=tier.value)
        return table[tier]

    def vanity_addons(self, tier: Tier) -> VanityAddOns:
        if tier not in self._vanity_addons:
            raise CatalogLookupMiss(f"No vanity add-on pricing for {tier.value} tier", category=Category.VANITIES.value, name=tier.value)
        return self._vanity_addons[tier]

    def kitchen_addons(self, tier: Tier) -> KitchenAddOns:
        if tier not in self._kitchen_addons:
            raise CatalogLookupMiss(f"No kitchen upgrade pricing for {tier.value} tier", category=Category.KITCHENS.value, name=tier.value)
        return self._kitchen_addons[tier]

    def names(self, category: Category) -> list[str]:
        return list(self._prices.get(category, {}))
