"""Configuration package."""

from quadboard.config.settings import (
    AppSettings,
    BoardSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "BoardSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
