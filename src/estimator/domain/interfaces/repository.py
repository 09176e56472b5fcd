"""
Kiosk Estimator - Estimate Repository Protocol Interface

Protocol-based interface for estimate persistence (PEP 544).
"""
from typing import Protocol

from estimator.domain.models import EstimateRecord


class EstimateRepository(Protocol):
    """
    Protocol for estimate storage implementations.

    Uses Protocol (PEP 544) for structural subtyping (duck typing with type checking).
    """

    def save(self, record: EstimateRecord, estimate_id: str | None = None) -> str:
        """
        Save estimate (insert, or update when estimate_id is given).

        Args:
            record: Estimate record to save
            estimate_id: Existing estimate ID to overwrite

        Returns:
            Estimate ID

        Raises:
            PersistenceFailure: If save fails
        """
        ...

    def get(self, estimate_id: str) -> EstimateRecord | None:
        """
        Get estimate by ID.

        Returns:
            EstimateRecord or None if not found

        Raises:
            PersistenceFailure: If query fails
        """
        ...

    def delete(self, estimate_id: str) -> bool:
        """
        Delete estimate by ID.

        Returns:
            True if a row was deleted

        Raises:
            PersistenceFailure: If delete fails
        """
        ...
