"""
Kiosk Estimator - Infrastructure Factory

Factory functions for dependency injection and easy setup.
"""
import logging
from typing import Any

from estimator.application.controller import EstimateController
from estimator.application.estimate_service import EstimateService
from estimator.application.exporter import DocumentExporter
from estimator.application.importer import CabinetImportMatcher
from estimator.domain.interfaces import CatalogReference
from estimator.domain.models.config import AppConfig
from estimator.infrastructure.catalog import InMemoryCatalog
from estimator.infrastructure.database import PostgresEstimateRepository

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for an entry point (never called from library code)."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def create_catalog(config: AppConfig) -> InMemoryCatalog:
    """
    Create the catalog.

    Args:
        config: Application configuration

    Returns:
        InMemoryCatalog loaded from config.catalog_path, or an empty price
        list with the standard tier tables
    """
    if config.catalog_path:
        return InMemoryCatalog.from_file(config.catalog_path)
    logger.warning("No catalog_path configured; starting with an empty price list")
    return InMemoryCatalog()


def create_repository(config: AppConfig) -> PostgresEstimateRepository:
    """
    Create PostgreSQL estimate repository.

    Args:
        config: Application configuration

    Returns:
        PostgresEstimateRepository instance
    """
    return PostgresEstimateRepository(config.database)


def create_exporter(config: AppConfig) -> DocumentExporter:
    return DocumentExporter(config.export)


def create_controller(config: AppConfig, catalog: CatalogReference) -> EstimateController:
    """
    Create an estimate controller for one session.

    Args:
        config: Application configuration
        catalog: Shared catalog

    Returns:
        EstimateController instance
    """
    return EstimateController(
        catalog,
        installation_rate=config.pricing.installation_rate,
        import_matcher=CabinetImportMatcher(catalog, config.imports),
    )


def create_estimate_service(config: AppConfig, repository: Any = None) -> EstimateService:
    """
    Create the async save/export service.

    Args:
        config: Application configuration
        repository: Estimate repository (default: PostgreSQL)

    Returns:
        EstimateService instance
    """
    return EstimateService(
        repository if repository is not None else create_repository(config),
        exporter=create_exporter(config),
        max_workers=config.max_workers,
    )


def quick_setup(config: AppConfig | None = None, repository: Any = None) -> dict[str, Any]:
    """
    Quick setup with default configuration.

    Returns:
        Dict with initialized components:
        - config: AppConfig
        - catalog: InMemoryCatalog
        - service: EstimateService
        - controller: EstimateController
    """
    config = config or AppConfig.from_env()
    configure_logging(config.log_level)

    catalog = create_catalog(config)
    components = {
        "config": config,
        "catalog": catalog,
        "service": create_estimate_service(config, repository),
        "controller": create_controller(config, catalog),
    }

    logger.info("✅ Quick setup complete")
    return components
