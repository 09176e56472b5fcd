"""Kiosk Estimator - Domain Interfaces (Protocols)."""

from .catalog import CatalogReference
from .repository import EstimateRepository

__all__ = [
    # Catalog
    "CatalogReference",
    # Persistence
    "EstimateRepository",
]
