"""Configuration package."""

from iexpense.config.settings import (
    LoggingSettings,
    Settings,
    StorageFormat,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "LoggingSettings",
    "Settings",
    "StorageFormat",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
