"""
Configuration Management for Split Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The engine functions take their tolerances as plain arguments; the
orchestration layer reads them from here and passes them down.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """Numeric tolerances and display options for the ledger engine."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        extra="ignore"
    )

    settle_epsilon: float = Field(
        default=0.01,
        ge=0.0,
        le=1.0,
        description="Balances and debts at or below this size count as settled"
    )
    zero_sum_tolerance: float = Field(
        default=1e-9,
        gt=0.0,
        description="Relative tolerance for the balances-sum-to-zero check"
    )
    currency_symbol: str = Field(
        default="$",
        max_length=5,
        description="Symbol used when formatting amounts for people"
    )


class DataSourceSettings(BaseSettings):
    """Retry behaviour when reading group records from a data source."""

    model_config = SettingsConfigDict(
        env_prefix="DATA_SOURCE_",
        extra="ignore"
    )

    fetch_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="How many times a read is attempted before giving up"
    )
    retry_wait_multiplier: float = Field(
        default=1.0,
        ge=0.0,
        description="Multiplier for the exponential backoff between attempts"
    )
    retry_wait_max: float = Field(
        default=10.0,
        ge=0.0,
        description="Upper bound in seconds for a single backoff wait"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    debug_mode: bool = Field(
        default=False,
        description="Log at DEBUG regardless of log_level"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum level for local structured logs"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept any casing but reject unknown level names."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug_mode else self.log_level


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

    # Note: These are loaded lazily to allow partial configuration

    @property
    def ledger(self) -> LedgerSettings:
        return LedgerSettings()

    @property
    def data_source(self) -> DataSourceSettings:
        return DataSourceSettings()

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
        _ = settings.ledger
        results["ledger"] = True
    except Exception as e:
        results["ledger"] = False
        results["ledger_error"] = str(e)

    try:
        _ = settings.data_source
        results["data_source"] = True
    except Exception as e:
        results["data_source"] = False
        results["data_source_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
