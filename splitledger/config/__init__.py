"""Configuration package."""

from splitledger.config.settings import (
    AppSettings,
    DataSourceSettings,
    LedgerSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "DataSourceSettings",
    "LedgerSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
