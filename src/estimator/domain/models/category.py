"""
Kiosk Estimator - Category Domain Model

The seven independent line-item categories and their measurement rules.
"""
from dataclasses import dataclass
from enum import Enum


class Category(str, Enum):
    """Line-item category."""

    CABINETS = "cabinets"
    REPLACEMENT_DOORS = "replacement_doors"
    FLOORING = "flooring"
    COUNTERTOPS = "countertops"
    HARDWARE = "hardware"
    VANITIES = "vanities"
    KITCHENS = "kitchens"

    @property
    def spec(self) -> "CategorySpec":
        return CATEGORY_SPECS[self]

    @property
    def label(self) -> str:
        return CATEGORY_SPECS[self].label

    @property
    def is_tiered(self) -> bool:
        """Vanity and kitchen packages are priced from tier tables, not the catalog."""
        return self in (Category.VANITIES, Category.KITCHENS)


class Tier(str, Enum):
    """Good/better/best package level."""

    GOOD = "good"
    BETTER = "better"
    BEST = "best"

    @property
    def label(self) -> str:
        return f"{self.value.capitalize()} Tier"


@dataclass(frozen=True)
class CategorySpec:
    """
    Bounds and display metadata for one category.

    Integer categories take whole-unit quantities; the others take a float
    measurement (square or linear feet).
    """

    label: str
    field_name: str
    unit: str
    minimum: float
    maximum: float
    integer: bool = True
    record_key: str = ""

    @property
    def total_key(self) -> str:
        return self.record_key.replace("_items", "_total")


QUANTITY_MIN = 1
QUANTITY_MAX = 1000
FLOORING_MIN_SQFT = 0.1
FLOORING_MAX_SQFT = 100000.0
COUNTERTOP_MIN_LINEAR_FT = 0.1
COUNTERTOP_MAX_LINEAR_FT = 10000.0


CATEGORY_SPECS: dict[Category, CategorySpec] = {
    Category.CABINETS: CategorySpec(
        label="Cabinets", field_name="quantity", unit="ea",
        minimum=QUANTITY_MIN, maximum=QUANTITY_MAX, record_key="cabinet_items",
    ),
    Category.REPLACEMENT_DOORS: CategorySpec(
        label="Replacement Doors", field_name="quantity", unit="ea",
        minimum=QUANTITY_MIN, maximum=QUANTITY_MAX, record_key="replacement_door_items",
    ),
    Category.FLOORING: CategorySpec(
        label="Flooring", field_name="square_feet", unit="sq ft",
        minimum=FLOORING_MIN_SQFT, maximum=FLOORING_MAX_SQFT, integer=False,
        record_key="flooring_items",
    ),
    Category.COUNTERTOPS: CategorySpec(
        label="Countertops", field_name="linear_feet", unit="linear ft",
        minimum=COUNTERTOP_MIN_LINEAR_FT, maximum=COUNTERTOP_MAX_LINEAR_FT, integer=False,
        record_key="countertop_items",
    ),
    Category.HARDWARE: CategorySpec(
        label="Hardware", field_name="quantity", unit="ea",
        minimum=QUANTITY_MIN, maximum=QUANTITY_MAX, record_key="hardware_items",
    ),
    Category.VANITIES: CategorySpec(
        label="Vanities", field_name="quantity", unit="ea",
        minimum=QUANTITY_MIN, maximum=QUANTITY_MAX, record_key="vanity_items",
    ),
    Category.KITCHENS: CategorySpec(
        label="Kitchens", field_name="quantity", unit="ea",
        minimum=QUANTITY_MIN, maximum=QUANTITY_MAX, record_key="kitchen_items",
    ),
}

# Canonical display/export order
CATEGORY_ORDER: tuple[Category, ...] = tuple(Category)

# Categories whose combined unit count drives the markup tier
MARKUP_QUANTITY_CATEGORIES: tuple[Category, ...] = (Category.CABINETS, Category.REPLACEMENT_DOORS)

# Cyclic order for tab navigation between editable cells
TAB_ORDER: tuple[Category, ...] = (Category.CABINETS, Category.FLOORING, Category.COUNTERTOPS)
