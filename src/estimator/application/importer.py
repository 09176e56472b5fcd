"""
Kiosk Estimator - Cabinet Import Matcher

Bulk-matches {name, quantity} pairs against the cabinet catalog. Matching is
a case-insensitive substring test in either direction; when several catalog
entries qualify, the closest one by string similarity wins.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from rapidfuzz import fuzz

from estimator.domain.exceptions import ValidationError
from estimator.domain.interfaces import CatalogReference
from estimator.domain.models import Category, CabinetLineItem
from estimator.domain.models.config import ImportConfig
from .validation import validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportEntry:
    """One row of an import list."""

    name: str
    quantity: Any

    @classmethod
    def from_dict(cls, data: dict) -> "ImportEntry":
        return cls(name=str(data.get("name", "") or "").strip(), quantity=data.get("quantity"))


@dataclass(frozen=True)
class RejectedEntry:
    """Entry that matched a catalog name but carried an invalid quantity."""

    entry: ImportEntry
    matched_name: str
    reason: str


@dataclass
class ImportReport:
    """Outcome of an import: loaded items plus everything that was not loaded."""

    matched: list[CabinetLineItem] = field(default_factory=list)
    unmatched: list[ImportEntry] = field(default_factory=list)
    rejected: list[RejectedEntry] = field(default_factory=list)

    @property
    def has_problems(self) -> bool:
        return bool(self.unmatched or self.rejected)

    def to_dict(self) -> dict[str, Any]:
        return {
            "matched": [item.to_dict() for item in self.matched],
            "unmatched": [{"name": e.name, "quantity": e.quantity} for e in self.unmatched],
            "rejected": [
                {"name": r.entry.name, "quantity": r.entry.quantity, "matched_name": r.matched_name, "reason": r.reason}
                for r in self.rejected
            ],
        }


def is_substring_match(entry_name: str, catalog_name: str) -> bool:
    """Case-insensitive substring test, either direction."""
    a = entry_name.strip().lower()
    b = catalog_name.strip().lower()
    if not a or not b:
        return False
    return a in b or b in a


class CabinetImportMatcher:
    """
    Matches import entries to cabinet catalog names.

    Prices come from the catalog at import time, like a manual add.
    """

    def __init__(self, catalog: CatalogReference, config: ImportConfig | None = None):
        """
        Initialize CabinetImportMatcher.

        Args:
            catalog: Catalog with the cabinet price list
            config: Matching configuration
        """
        self.catalog = catalog
        self.config = config or ImportConfig()

    def find_match(self, name: str) -> str | None:
        """
        Best catalog name for an import name.

        Returns:
            Catalog name, or None when nothing matches
        """
        candidates = [n for n in self.catalog.names(Category.CABINETS) if is_substring_match(name, n)]
        if not candidates:
            return None
        if len(candidates) == 1 or not self.config.prefer_closest_match:
            return candidates[0]

        needle = name.strip().lower()
        scored = [(fuzz.ratio(needle, c.lower()), -i, c) for i, c in enumerate(candidates)]
        score, _, best = max(scored)
        if score < self.config.min_similarity:
            return None
        return best

    def match(self, entries: Iterable[ImportEntry | dict]) -> ImportReport:
        """
        Match a list of import entries.

        Args:
            entries: ImportEntry objects or {name, quantity} dicts

        Returns:
            ImportReport with matched items in input order
        """
        report = ImportReport()
        for raw in entries:
            entry = raw if isinstance(raw, ImportEntry) else ImportEntry.from_dict(raw)
            catalog_name = self.find_match(entry.name) if entry.name else None
            if catalog_name is None:
                report.unmatched.append(entry)
                continue

            try:
                quantity = validate(Category.CABINETS, entry.quantity)
            except ValidationError as e:
                report.rejected.append(RejectedEntry(entry=entry, matched_name=catalog_name, reason=e.message))
                continue

            price = self.catalog.lookup_price(Category.CABINETS, catalog_name)
            report.matched.append(CabinetLineItem(type=price.name, quantity=quantity, unit_price=price.unit_price))

        logger.info(
            f"✅ Cabinet import: {len(report.matched)} matched, "
            f"{len(report.unmatched)} unmatched, {len(report.rejected)} rejected"
        )
        return report
