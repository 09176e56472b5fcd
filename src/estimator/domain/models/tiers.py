"""
Kiosk Estimator - Tier Pricing Tables

Good/better/best package pricing for vanities and kitchens. Prices are
resolved once when a line item is added and then frozen onto the record.
"""
from dataclasses import dataclass

from .category import Category, Tier


@dataclass(frozen=True)
class TierPricing:
    """
    Base price per unit for a tier, with the market range it sits in.

    Immutable value object.
    """

    base: float
    min: float
    max: float

    def __post_init__(self):
        if self.base < 0:
            raise ValueError(f"Tier base price cannot be negative: {self.base}")
        if self.min > self.max:
            raise ValueError(f"Tier range is inverted: {self.min} > {self.max}")

    def to_dict(self) -> dict[str, float]:
        return {"base": self.base, "min": self.min, "max": self.max}


@dataclass(frozen=True)
class VanityAddOns:
    """Per-unit vanity add-on costs."""

    single_to_double: float
    plumbing_wall_change: float


@dataclass(frozen=True)
class KitchenAddOns:
    """Per-unit kitchen upgrade costs."""

    cabinet_upgrade: float
    countertop_upgrade: float


VANITY_TIER_PRICING: dict[Tier, TierPricing] = {
    Tier.GOOD: TierPricing(base=2150.0, min=1950.0, max=2800.0),
    Tier.BETTER: TierPricing(base=3100.0, min=2850.0, max=4000.0),
    Tier.BEST: TierPricing(base=4650.0, min=4000.0, max=6500.0),
}

KITCHEN_TIER_PRICING: dict[Tier, TierPricing] = {
    Tier.GOOD: TierPricing(base=9500.0, min=8800.0, max=11000.0),
    Tier.BETTER: TierPricing(base=12750.0, min=11500.0, max=15000.0),
    Tier.BEST: TierPricing(base=18500.0, min=15500.0, max=24000.0),
}

VANITY_ADDONS: dict[Tier, VanityAddOns] = {
    tier: VanityAddOns(single_to_double=650.0, plumbing_wall_change=450.0) for tier in Tier
}

KITCHEN_ADDONS: dict[Tier, KitchenAddOns] = {
    tier: KitchenAddOns(cabinet_upgrade=1850.0, countertop_upgrade=2650.0) for tier in Tier
}

DEFAULT_TIER_PRICING: dict[Category, dict[Tier, TierPricing]] = {
    Category.VANITIES: VANITY_TIER_PRICING,
    Category.KITCHENS: KITCHEN_TIER_PRICING,
}


def get_tier(value: "Tier | str") -> Tier:
    """
    Coerce a tier name to Tier.

    Raises:
        ValueError: If the name is not good/better/best
    """
    if isinstance(value, Tier):
        return value
    try:
        return Tier(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown tier: {value!r} (expected good, better or best)")
