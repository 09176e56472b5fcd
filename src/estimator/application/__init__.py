"""Kiosk Estimator - Application layer."""

from .validation import validate
from .store import LineItemStore
from .pricing import compute_totals, select_markup_tier
from .controller import EstimateController, EditCursor, Direction
from .exporter import DocumentExporter
from .importer import CabinetImportMatcher, ImportEntry, ImportReport
from .estimate_service import EstimateService

__all__ = [
    "validate",
    "LineItemStore",
    "compute_totals",
    "select_markup_tier",
    "EstimateController",
    "EditCursor",
    "Direction",
    "DocumentExporter",
    "CabinetImportMatcher",
    "ImportEntry",
    "ImportReport",
    "EstimateService",
]
