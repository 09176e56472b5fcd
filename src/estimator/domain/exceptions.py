"""
Kiosk Estimator - Domain Exceptions

Custom exception hierarchy for structured error handling.
"""
from typing import Any


class EstimatorException(Exception):
    """Base exception for all estimator errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items() if v is not None)
            if details_str:
                return f"{self.message} ({details_str})"
        return self.message


class ValidationError(EstimatorException):
    """Quantity or measurement outside its category bounds."""

    def __init__(self, message: str, field_name: str | None = None, value: Any = None, **kwargs):
        super().__init__(message, {"field_name": field_name, "value": value, **kwargs})
        self.field_name = field_name
        self.value = value


class CatalogLookupMiss(EstimatorException):
    """Selection references a name that is not in the catalog."""

    def __init__(self, message: str, category: str | None = None, name: str | None = None, **kwargs):
        super().__init__(message, {"category": category, "name": name, **kwargs})
        self.category = category
        self.name = name


class LineItemNotFound(EstimatorException):
    """Index does not address an existing line item."""

    def __init__(self, message: str, category: str | None = None, index: int | None = None, **kwargs):
        super().__init__(message, {"category": category, "index": index, **kwargs})
        self.category = category
        self.index = index


class PersistenceFailure(EstimatorException):
    """Save/load/export call failed. In-memory state stays valid."""

    def __init__(self, message: str, operation: str | None = None, estimate_id: str | None = None, **kwargs):
        super().__init__(message, {"operation": operation, "estimate_id": estimate_id, **kwargs})
        self.operation = operation
        self.estimate_id = estimate_id


class ConnectionFailure(PersistenceFailure):
    """Database connection error."""

    pass


class ImportParsingError(EstimatorException):
    """Import file could not be read."""

    def __init__(self, message: str, file_name: str | None = None, row: int | None = None, **kwargs):
        super().__init__(message, {"file_name": file_name, "row": row, **kwargs})


class ConfigurationError(EstimatorException):
    """Configuration error."""

    def __init__(self, message: str, config_key: str | None = None, **kwargs):
        super().__init__(message, {"config_key": config_key, **kwargs})
