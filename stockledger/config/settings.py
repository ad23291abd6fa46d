"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from stockledger.core.exceptions import ConfigurationError


class InventorySettings(BaseSettings):
    """Inventory ledger configuration."""

    model_config = SettingsConfigDict(env_prefix="INVENTORY_")

    # Stock above the minimum but within this fraction of it raises a warning
    low_stock_warning_margin: float = 0.15
    currency: str = "CLP"
    default_unit: str = "unit"
    kardex_page_limit: int = 1000

    @field_validator("low_stock_warning_margin")
    @classmethod
    def check_margin(cls, v: float) -> float:
        if v < 0:
            raise ValueError("low_stock_warning_margin must be >= 0")
        return v

    @field_validator("kardex_page_limit")
    @classmethod
    def check_page_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError("kardex_page_limit must be >= 1")
        return v


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Stock Ledger"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    inventory: InventorySettings = Field(default_factory=InventorySettings)
    api: APISettings = Field(default_factory=APISettings)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get or create global settings instance.

    Raises:
        ConfigurationError: If the environment holds an invalid value
    """
    global _settings
    if _settings is None:
        try:
            _settings = Settings()
        except ValidationError as e:
            fields = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
            raise ConfigurationError(
                f"Invalid configuration: {e.error_count()} error(s)",
                code="CONFIGURATION_ERROR",
                details={"fields": fields},
            ) from e
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
