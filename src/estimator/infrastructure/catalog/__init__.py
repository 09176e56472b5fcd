"""Catalog adapters."""

from .in_memory_catalog import InMemoryCatalog

__all__ = ["InMemoryCatalog"]
