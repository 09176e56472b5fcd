"""
Kiosk Estimator - Validation Rules

Per-category bounds checks on quantity/measurement input. Pure and
synchronous; a rejected value never reaches the store.
"""
import logging
import math
from typing import Any

from estimator.domain.exceptions import ValidationError
from estimator.domain.models import Category

logger = logging.getLogger(__name__)


def _format_bound(value: float) -> str:
    return f"{value:g}" if not float(value).is_integer() else f"{int(value):,}"


def _parse_number(category: Category, raw: Any) -> float:
    spec = category.spec
    if isinstance(raw, bool) or raw is None:
        raise ValidationError(f"{spec.label}: please enter a number", field_name=spec.field_name, value=raw)

    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            raise ValidationError(f"{spec.label}: number is too large", field_name=spec.field_name, value=raw)
    else:
        text = str(raw).strip().replace(",", "")
        if not text:
            raise ValidationError(f"{spec.label}: please enter a number", field_name=spec.field_name, value=raw)
        try:
            value = float(text)
        except ValueError:
            raise ValidationError(f"{spec.label}: '{raw}' is not a number", field_name=spec.field_name, value=raw)

    if math.isnan(value) or math.isinf(value):
        raise ValidationError(f"{spec.label}: please enter a number", field_name=spec.field_name, value=raw)
    return value


def validate(category: Category, raw_value: Any) -> int | float:
    """
    Validate a quantity/measurement for a category.

    Integer categories (cabinets, replacement doors, hardware, vanities,
    kitchens) take whole numbers in [1, 1000]. Flooring takes square feet in
    [0.1, 100000], countertops linear feet in [0.1, 10000].

    Args:
        category: Target category
        raw_value: Raw input (str from a text field, or a number)

    Returns:
        int for integer categories, float otherwise

    Raises:
        ValidationError: If the value is non-numeric or out of bounds
    """
    spec = category.spec
    value = _parse_number(category, raw_value)

    if spec.integer:
        if not value.is_integer():
            logger.info(f"Rejected {category.value} quantity {raw_value!r}: not a whole number")
            raise ValidationError(
                f"{spec.label}: quantity must be a whole number",
                field_name=spec.field_name,
                value=raw_value,
            )
        value = int(value)

    if value < spec.minimum or value > spec.maximum:
        logger.info(f"Rejected {category.value} {spec.field_name} {raw_value!r}: out of bounds")
        raise ValidationError(
            f"{spec.label}: {spec.field_name.replace('_', ' ')} must be between "
            f"{_format_bound(spec.minimum)} and {_format_bound(spec.maximum)}",
            field_name=spec.field_name,
            value=raw_value,
        )

    return value


def is_valid(category: Category, raw_value: Any) -> bool:
    """True when validate() would accept the value."""
    try:
        validate(category, raw_value)
    except ValidationError:
        return False
    return True
