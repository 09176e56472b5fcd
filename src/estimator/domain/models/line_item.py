"""
Kiosk Estimator - Line Item Domain Models

One immutable record per estimate row. Unit prices are snapshots taken when
the row was added; only the quantity/measurement changes afterwards, and
only by replacing the record.
"""
from dataclasses import dataclass, replace
from typing import Any, ClassVar, Union

from .category import Category, Tier
from .tiers import get_tier


@dataclass(frozen=True)
class _LineItemBase:
    """Shared behaviour for all line-item records."""

    category: ClassVar[Category]
    measure_field: ClassVar[str] = "quantity"

    @property
    def measure(self) -> float:
        """Quantity or measurement (sq ft / linear ft)."""
        return getattr(self, self.measure_field)

    @property
    def unit_cost(self) -> float:
        """Sum of the resolved per-unit costs."""
        raise NotImplementedError

    @property
    def line_total(self) -> float:
        """Quantity x unit cost. Never re-priced from the catalog."""
        return self.measure * self.unit_cost

    @property
    def label(self) -> str:
        raise NotImplementedError

    def with_measure(self, value: float) -> "LineItem":
        """Copy with a new quantity/measurement; price fields untouched."""
        return replace(self, **{self.measure_field: value})

    def _check_measure(self) -> None:
        if self.measure < 0:
            raise ValueError(f"{self.measure_field} cannot be negative: {self.measure}")


@dataclass(frozen=True)
class CabinetLineItem(_LineItemBase):
    """Cabinet box from the cabinet catalog."""

    category: ClassVar[Category] = Category.CABINETS

    type: str
    quantity: int
    unit_price: float

    def __post_init__(self):
        if not self.type or not self.type.strip():
            raise ValueError("Cabinet type cannot be empty")
        if self.unit_price < 0:
            raise ValueError(f"Unit price cannot be negative: {self.unit_price}")
        self._check_measure()

    @property
    def unit_cost(self) -> float:
        return self.unit_price

    @property
    def label(self) -> str:
        return self.type

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "quantity": self.quantity, "unit_price": self.unit_price}

    @classmethod
    def from_dict(cls, data: dict) -> "CabinetLineItem":
        return cls(
            type=str(data.get("type", "")).strip(),
            quantity=int(data.get("quantity", 0)),
            unit_price=float(data.get("unit_price", 0.0)),
        )


@dataclass(frozen=True)
class ReplacementDoorLineItem(CabinetLineItem):
    """Replacement door style. Shares the cabinet quantity bounds."""

    category: ClassVar[Category] = Category.REPLACEMENT_DOORS


@dataclass(frozen=True)
class FlooringLineItem(_LineItemBase):
    """Flooring priced per square foot."""

    category: ClassVar[Category] = Category.FLOORING
    measure_field: ClassVar[str] = "square_feet"

    type: str
    square_feet: float
    unit_price_per_sqft: float

    def __post_init__(self):
        if not self.type or not self.type.strip():
            raise ValueError("Flooring type cannot be empty")
        if self.unit_price_per_sqft < 0:
            raise ValueError(f"Unit price cannot be negative: {self.unit_price_per_sqft}")
        self._check_measure()

    @property
    def unit_cost(self) -> float:
        return self.unit_price_per_sqft

    @property
    def label(self) -> str:
        return self.type

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "square_feet": self.square_feet,
            "unit_price_per_sqft": self.unit_price_per_sqft,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FlooringLineItem":
        return cls(
            type=str(data.get("type", "")).strip(),
            square_feet=float(data.get("square_feet", 0.0)),
            unit_price_per_sqft=float(data.get("unit_price_per_sqft", 0.0)),
        )


@dataclass(frozen=True)
class CountertopLineItem(_LineItemBase):
    """Countertop priced per linear foot."""

    category: ClassVar[Category] = Category.COUNTERTOPS
    measure_field: ClassVar[str] = "linear_feet"

    type: str
    linear_feet: float
    unit_price_per_linear_ft: float

    def __post_init__(self):
        if not self.type or not self.type.strip():
            raise ValueError("Countertop type cannot be empty")
        if self.unit_price_per_linear_ft < 0:
            raise ValueError(f"Unit price cannot be negative: {self.unit_price_per_linear_ft}")
        self._check_measure()

    @property
    def unit_cost(self) -> float:
        return self.unit_price_per_linear_ft

    @property
    def label(self) -> str:
        return self.type

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "linear_feet": self.linear_feet,
            "unit_price_per_linear_ft": self.unit_price_per_linear_ft,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CountertopLineItem":
        return cls(
            type=str(data.get("type", "")).strip(),
            linear_feet=float(data.get("linear_feet", 0.0)),
            unit_price_per_linear_ft=float(data.get("unit_price_per_linear_ft", 0.0)),
        )


@dataclass(frozen=True)
class HardwareLineItem(_LineItemBase):
    """Hardware (pulls, knobs, hinges) with an optional product image."""

    category: ClassVar[Category] = Category.HARDWARE

    type: str
    quantity: int
    unit_price: float
    image_ref: str | None = None

    def __post_init__(self):
        if not self.type or not self.type.strip():
            raise ValueError("Hardware type cannot be empty")
        if self.unit_price < 0:
            raise ValueError(f"Unit price cannot be negative: {self.unit_price}")
        self._check_measure()

    @property
    def unit_cost(self) -> float:
        return self.unit_price

    @property
    def label(self) -> str:
        return self.type

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "image_ref": self.image_ref,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HardwareLineItem":
        return cls(
            type=str(data.get("type", "")).strip(),
            quantity=int(data.get("quantity", 0)),
            unit_price=float(data.get("unit_price", 0.0)),
            image_ref=data.get("image_ref") or None,
        )


@dataclass(frozen=True)
class VanityLineItem(_LineItemBase):
    """
    Vanity package.

    conversion_cost and plumbing_cost are per-unit costs resolved from the
    tier table at add time; they are 0 when the matching flag is off.
    """

    category: ClassVar[Category] = Category.VANITIES

    tier: Tier
    quantity: int
    base_price: float
    single_to_double: bool = False
    plumbing_wall_change: bool = False
    conversion_cost: float = 0.0
    plumbing_cost: float = 0.0

    def __post_init__(self):
        if not isinstance(self.tier, Tier):
            object.__setattr__(self, "tier", get_tier(self.tier))
        if self.base_price < 0:
            raise ValueError(f"Base price cannot be negative: {self.base_price}")
        self._check_measure()

    @property
    def unit_cost(self) -> float:
        return self.base_price + self.conversion_cost + self.plumbing_cost

    @property
    def label(self) -> str:
        extras = []
        if self.single_to_double:
            extras.append("Single to Double Conversion")
        if self.plumbing_wall_change:
            extras.append("Plumbing Wall Change")
        base = f"{self.tier.label} Vanity"
        return f"{base} ({', '.join(extras)})" if extras else base

    def to_dict(self) -> dict[str, Any]:
        return {
            "tier": self.tier.value,
            "quantity": self.quantity,
            "base_price": self.base_price,
            "single_to_double": self.single_to_double,
            "plumbing_wall_change": self.plumbing_wall_change,
            "conversion_cost": self.conversion_cost,
            "plumbing_cost": self.plumbing_cost,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "VanityLineItem":
        return cls(
            tier=get_tier(data.get("tier", "good")),
            quantity=int(data.get("quantity", 0)),
            base_price=float(data.get("base_price", 0.0)),
            single_to_double=bool(data.get("single_to_double", False)),
            plumbing_wall_change=bool(data.get("plumbing_wall_change", False)),
            conversion_cost=float(data.get("conversion_cost", 0.0)),
            plumbing_cost=float(data.get("plumbing_cost", 0.0)),
        )


@dataclass(frozen=True)
class KitchenLineItem(_LineItemBase):
    """Kitchen package with optional cabinet/countertop upgrades."""

    category: ClassVar[Category] = Category.KITCHENS

    tier: Tier
    quantity: int
    base_price: float
    cabinet_upgrade: bool = False
    countertop_upgrade: bool = False
    cabinet_cost: float = 0.0
    countertop_cost: float = 0.0

    def __post_init__(self):
        if not isinstance(self.tier, Tier):
            object.__setattr__(self, "tier", get_tier(self.tier))
        if self.base_price < 0:
            raise ValueError(f"Base price cannot be negative: {self.base_price}")
        self._check_measure()

    @property
    def unit_cost(self) -> float:
        return self.base_price + self.cabinet_cost + self.countertop_cost

    @property
    def label(self) -> str:
        extras = []
        if self.cabinet_upgrade:
            extras.append("Cabinet Upgrade")
        if self.countertop_upgrade:
            extras.append("Countertop Upgrade")
        base = f"{self.tier.label} Kitchen"
        return f"{base} ({', '.join(extras)})" if extras else base

    def to_dict(self) -> dict[str, Any]:
        return {
            "tier": self.tier.value,
            "quantity": self.quantity,
            "base_price": self.base_price,
            "cabinet_upgrade": self.cabinet_upgrade,
            "countertop_upgrade": self.countertop_upgrade,
            "cabinet_cost": self.cabinet_cost,
            "countertop_cost": self.countertop_cost,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "KitchenLineItem":
        return cls(
            tier=get_tier(data.get("tier", "good")),
            quantity=int(data.get("quantity", 0)),
            base_price=float(data.get("base_price", 0.0)),
            cabinet_upgrade=bool(data.get("cabinet_upgrade", False)),
            countertop_upgrade=bool(data.get("countertop_upgrade", False)),
            cabinet_cost=float(data.get("cabinet_cost", 0.0)),
            countertop_cost=float(data.get("countertop_cost", 0.0)),
        )


LineItem = Union[
    CabinetLineItem,
    ReplacementDoorLineItem,
    FlooringLineItem,
    CountertopLineItem,
    HardwareLineItem,
    VanityLineItem,
    KitchenLineItem,
]

LINE_ITEM_TYPES: dict[Category, type] = {
    Category.CABINETS: CabinetLineItem,
    Category.REPLACEMENT_DOORS: ReplacementDoorLineItem,
    Category.FLOORING: FlooringLineItem,
    Category.COUNTERTOPS: CountertopLineItem,
    Category.HARDWARE: HardwareLineItem,
    Category.VANITIES: VanityLineItem,
    Category.KITCHENS: KitchenLineItem,
}


def line_item_from_dict(category: Category, data: dict) -> LineItem:
    """Rebuild a line item of the given category from its dict form."""
    return LINE_ITEM_TYPES[category].from_dict(data)
