"""Persistence adapters."""

from .postgres_repository import PostgresEstimateRepository

__all__ = ["PostgresEstimateRepository"]
