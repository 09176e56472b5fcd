"""
Unit tests for quantity/measurement validation.
"""

import pytest

from estimator.application.validation import validate, is_valid
from estimator.domain.exceptions import ValidationError
from estimator.domain.models import Category


INTEGER_CATEGORIES = [
    Category.CABINETS,
    Category.REPLACEMENT_DOORS,
    Category.HARDWARE,
    Category.VANITIES,
    Category.KITCHENS,
]


class TestIntegerCategories:
    """Whole-unit quantities in [1, 1000]"""

    @pytest.mark.parametrize("category", INTEGER_CATEGORIES)
    def test_bounds(self, category):
        assert validate(category, 1) == 1
        assert validate(category, 1000) == 1000

        with pytest.raises(ValidationError):
            validate(category, 0)
        with pytest.raises(ValidationError):
            validate(category, 1001)

    def test_text_input(self):
        value = validate(Category.CABINETS, " 12 ")
        assert value == 12
        assert isinstance(value, int)

    def test_whole_float_accepted(self):
        assert validate(Category.HARDWARE, "3.0") == 3

    def test_fraction_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate(Category.CABINETS, 2.5)
        assert exc_info.value.message == "Cabinets: quantity must be a whole number"
        assert exc_info.value.field_name == "quantity"

    def test_bound_message(self):
        with pytest.raises(ValidationError) as exc_info:
            validate(Category.VANITIES, 5000)
        assert exc_info.value.message == "Vanities: quantity must be between 1 and 1,000"


class TestMeasurementCategories:
    """Fractional square/linear feet"""

    def test_flooring_bounds(self):
        assert validate(Category.FLOORING, 0.1) == 0.1
        assert validate(Category.FLOORING, "100000") == 100000.0

        with pytest.raises(ValidationError) as exc_info:
            validate(Category.FLOORING, 0.05)
        assert exc_info.value.message == "Flooring: square feet must be between 0.1 and 100,000"

        with pytest.raises(ValidationError):
            validate(Category.FLOORING, 100000.5)

    def test_countertop_bounds(self):
        assert validate(Category.COUNTERTOPS, 12.5) == 12.5

        with pytest.raises(ValidationError) as exc_info:
            validate(Category.COUNTERTOPS, 10001)
        assert exc_info.value.field_name == "linear_feet"

    def test_thousands_separator(self):
        assert validate(Category.FLOORING, "1,250.5") == 1250.5


class TestNonNumericInput:
    """Garbage never reaches the store"""

    @pytest.mark.parametrize("raw", ["", "   ", None, "abc", "nan", "inf", True])
    def test_rejected(self, raw):
        with pytest.raises(ValidationError):
            validate(Category.CABINETS, raw)

    def test_huge_integer(self):
        """Ints beyond float range are a validation error, not an overflow"""
        with pytest.raises(ValidationError) as exc_info:
            validate(Category.CABINETS, 10 ** 400)
        assert exc_info.value.field_name == "quantity"

        with pytest.raises(ValidationError):
            validate(Category.FLOORING, -(10 ** 400))

    def test_is_valid(self):
        assert is_valid(Category.COUNTERTOPS, "8")
        assert not is_valid(Category.COUNTERTOPS, "-8")
