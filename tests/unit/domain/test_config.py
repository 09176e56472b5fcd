"""
Unit tests for configuration models.
"""

import pytest
from pydantic import ValidationError

from estimator.domain.models.config import (
    PricingConfig,
    DatabaseConfig,
    ImportConfig,
    ExportConfig,
    AppConfig,
)


class TestPricingConfig:
    """Test pricing configuration"""

    def test_default_config(self):
        config = PricingConfig()
        assert config.installation_rate == 0.15

    def test_invalid_rate(self):
        """Installation rate must be between 0 and 1"""
        with pytest.raises(ValidationError):
            PricingConfig(installation_rate=-0.1)

        with pytest.raises(ValidationError):
            PricingConfig(installation_rate=1.5)

    def test_config_immutable(self):
        config = PricingConfig()
        with pytest.raises(Exception):  # Pydantic frozen
            config.installation_rate = 0.2


class TestDatabaseConfig:
    """Test database configuration"""

    def test_default_config(self):
        config = DatabaseConfig()
        assert config.host == "localhost"
        assert config.port == 5432
        assert config.database == "kiosk"
        assert config.table_name == "estimates"

    def test_invalid_port(self):
        with pytest.raises(ValidationError):
            DatabaseConfig(port=0)

        with pytest.raises(ValidationError):
            DatabaseConfig(port=70000)

    def test_table_name_must_be_identifier(self):
        """Table name ends up in SQL text"""
        assert DatabaseConfig(table_name="estimates_v2").table_name == "estimates_v2"

        with pytest.raises(ValidationError):
            DatabaseConfig(table_name="estimates; DROP TABLE x")


class TestImportConfig:
    """Test import matching configuration"""

    def test_default_config(self):
        config = ImportConfig()
        assert config.prefer_closest_match is True
        assert config.min_similarity == 0

    def test_similarity_bounds(self):
        with pytest.raises(ValidationError):
            ImportConfig(min_similarity=101)


class TestExportConfig:
    """Test export configuration"""

    def test_default_config(self):
        config = ExportConfig()
        assert config.csv_encoding == "utf-8-sig"
        assert config.currency_symbol == "$"


class TestAppConfig:
    """Test complete application configuration"""

    def test_default_config(self):
        config = AppConfig()
        assert isinstance(config.pricing, PricingConfig)
        assert isinstance(config.database, DatabaseConfig)
        assert config.max_workers == 2
        assert config.catalog_path is None

    def test_for_testing(self):
        """Test configuration factory"""
        config = AppConfig.for_testing()
        assert config.database.database == "kiosk_test"
        assert config.max_workers == 1
        assert config.log_level == "DEBUG"

    def test_log_level_normalized(self):
        assert AppConfig(log_level="warning").log_level == "WARNING"

        with pytest.raises(ValidationError):
            AppConfig(log_level="LOUD")

    def test_from_env_nested(self, monkeypatch):
        """Nested settings use the __ delimiter"""
        monkeypatch.setenv("DATABASE__HOST", "db.internal")
        monkeypatch.setenv("PRICING__INSTALLATION_RATE", "0.2")
        monkeypatch.setenv("MAX_WORKERS", "4")

        config = AppConfig.from_env()
        assert config.database.host == "db.internal"
        assert config.pricing.installation_rate == 0.2
        assert config.max_workers == 4
