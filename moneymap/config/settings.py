"""
Configuration Management for MoneyMap

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The storage key names live here too, so a data file written by one
install can be read by another with the same settings.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MONEYMAP_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_file: Path = Field(
        default=Path.home() / ".moneymap" / "storage.json",
        description="JSON file holding the persisted key-value entries"
    )
    fsync_writes: bool = Field(
        default=True,
        description="fsync the data file after every write"
    )

    # Key names, one per persisted entry
    expenses_key: str = Field(
        default="spendingTrackerDataV1",
        description="Key for the serialized expense collection"
    )
    limit_key: str = Field(
        default="spendingTrackerMonthlyLimit",
        description="Key for the monthly spending limit"
    )
    income_key: str = Field(
        default="spendingTrackerMonthlyIncome",
        description="Key for the monthly income"
    )
    theme_key: str = Field(
        default="spendingTrackerTheme",
        description="Key for the UI theme name"
    )

    @field_validator('data_file')
    @classmethod
    def expand_data_file(cls, v: Path) -> Path:
        """Allow ~ in configured paths."""
        return v.expanduser()


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="MONEYMAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum level for the structured log"
    )

    # Display
    currency_symbol: str = Field(
        default="₹",
        min_length=1,
        max_length=5,
        description="Symbol prefixed to every formatted amount"
    )
    default_theme: str = Field(
        default="dark",
        pattern="^(light|dark)$",
        description="Theme used when none has been saved yet"
    )
    default_categories: str = Field(
        default="Food,Transport,Shopping,Bills,Entertainment,Health,Other",
        description="Comma-separated list of categories offered by the form"
    )

    # Export
    export_filename: str = Field(
        default="spending-tracker-data.json",
        description="File name suggested for data exports"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def categories_list(self) -> list[str]:
        """Get the default categories as a list, blanks removed."""
        return [
            cat.strip()
            for cat in self.default_categories.split(",")
            if cat.strip()
        ]


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        storage = settings.storage
        results["storage"] = True
        results["storage_path"] = str(storage.data_file)
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
