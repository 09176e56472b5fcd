"""
Shared fixtures for estimator tests.
"""

import pytest

from estimator.application import EstimateController
from estimator.domain.models import Category
from estimator.infrastructure.catalog import InMemoryCatalog


CABINET_PRICES = {
    "B12 Base": 189.0,
    "B15 Base": 205.0,
    "W3030 Wall": 150.0,
    "SB36 Sink Base": 320.0,
}


@pytest.fixture
def catalog():
    """Small price list covering every simple category"""
    return InMemoryCatalog.from_simple({
        Category.CABINETS: CABINET_PRICES,
        Category.REPLACEMENT_DOORS: {"Shaker Door": 45.0, "Slab Door": 38.0},
        Category.FLOORING: {"Oak Laminate": 3.25, "Porcelain Tile": 6.5},
        Category.COUNTERTOPS: {"Quartz": 85.0, "Butcher Block": 42.0},
        Category.HARDWARE: {"Bar Pull 5in": 6.5, "Round Knob": 4.0},
    })


@pytest.fixture
def controller(catalog):
    return EstimateController(catalog)
