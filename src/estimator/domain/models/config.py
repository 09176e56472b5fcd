"""
Kiosk Estimator - Configuration Models (Pydantic v2)

Validated configuration classes for application settings.
"""
from pydantic import BaseModel, Field, ConfigDict, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PricingConfig(BaseModel):
    """Pricing engine configuration."""

    model_config = ConfigDict(frozen=True)

    installation_rate: float = Field(default=0.15, ge=0.0, le=1.0, description="Installation cost as a fraction of the materials subtotal")


class DatabaseConfig(BaseModel):
    """PostgreSQL database configuration."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, ge=1, le=65535, description="Database port")
    database: str = Field(default="kiosk", description="Database name")
    user: str = Field(default="kiosk_user", description="Database user")
    password: str = Field(default="", description="Database password")
    pool_min_size: int = Field(default=1, ge=1, description="Min connection pool size")
    pool_max_size: int = Field(default=5, ge=1, le=100, description="Max connection pool size")
    table_name: str = Field(default="estimates", description="Estimates table")

    @field_validator("table_name")
    @classmethod
    def validate_table_name(cls, v: str) -> str:
        """Table name is interpolated into SQL, so keep it to identifier characters."""
        if not v or not all(c.isalnum() or c == "_" for c in v):
            raise ValueError(f"Invalid table name: {v}")
        return v


class ImportConfig(BaseModel):
    """Cabinet import matching configuration."""

    model_config = ConfigDict(frozen=True)

    prefer_closest_match: bool = Field(default=True, description="Rank several substring candidates by similarity")
    min_similarity: int = Field(default=0, ge=0, le=100, description="Min similarity (0-100) for a substring candidate")


class ExportConfig(BaseModel):
    """Document export configuration."""

    model_config = ConfigDict(frozen=True)

    csv_encoding: str = Field(default="utf-8-sig", description="CSV encoding (BOM for spreadsheet apps)")
    currency_symbol: str = Field(default="$", description="Currency symbol for summary lines")
    email_subject: str = Field(default="Your Project Estimate", description="Subject line for emailed estimates")


class AppConfig(BaseSettings):
    """
    Complete application configuration.

    Can be loaded from environment variables or .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
        frozen=True,
    )

    pricing: PricingConfig = Field(default_factory=PricingConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    imports: ImportConfig = Field(default_factory=ImportConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    catalog_path: str | None = Field(default=None, description="CSV/Excel price list to load at startup")
    max_workers: int = Field(default=2, ge=1, le=16, description="Workers for async save/export")
    log_level: str = Field(default="INFO", description="Logging level for entry points")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @classmethod
    def from_env(cls) -> "AppConfig":
        """
        Load configuration from environment variables.

        Environment variables:
        - DATABASE__HOST -> database.host
        - PRICING__INSTALLATION_RATE -> pricing.installation_rate
        - etc.

        Returns:
            AppConfig instance
        """
        return cls()

    @classmethod
    def for_testing(cls) -> "AppConfig":
        """
        Create minimal configuration for testing.

        Returns:
            AppConfig with test-friendly defaults
        """
        return cls(
            database=DatabaseConfig(
                host="localhost",
                database="kiosk_test",
                user="test_user",
                password="test_pass",
            ),
            max_workers=1,
            log_level="DEBUG",
        )
