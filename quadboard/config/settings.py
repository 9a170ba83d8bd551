"""
Configuration Management for Quadboard

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The core needs very little (where the two blobs live and what they are
called), but it is validated at startup like everything else.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from quadboard.services.storage.interface import InvalidKeyError, validate_key


class StorageSettings(BaseSettings):
    """Durable key-value substrate configuration."""

    model_config = SettingsConfigDict(
        env_prefix="QUADBOARD_STORAGE_",
        extra="ignore"
    )

    backend: Literal["file", "memory"] = Field(
        default="file",
        description="Substrate backend: one JSON file per key, or process memory"
    )
    data_dir: Path = Field(
        default=Path(".quadboard"),
        description="Directory holding the blob files (file backend only)"
    )

    # Blob keys within the substrate
    items_key: str = Field(
        default="board-items",
        description="Key of the notes blob"
    )
    settings_key: str = Field(
        default="board-settings",
        description="Key of the quadrant configuration blob"
    )

    @field_validator("items_key", "settings_key")
    @classmethod
    def validate_blob_key(cls, v: str) -> str:
        """Keys must be accepted by every substrate."""
        try:
            return validate_key(v.strip())
        except InvalidKeyError as e:
            raise ValueError(str(e)) from None


class BoardSettings(BaseSettings):
    """Board defaults."""

    model_config = SettingsConfigDict(
        env_prefix="QUADBOARD_BOARD_",
        extra="ignore"
    )

    default_name_prefix: str = Field(
        default="Quadrant",
        min_length=1,
        description="Default quadrant names are '<prefix> 1'..'<prefix> 4'"
    )
    audit_buffer_size: int = Field(
        default=200,
        ge=0,
        le=10000,
        description="How many recent audit events to keep in memory"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="QUADBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Stdlib log level used by the structlog filter"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return v

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

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def board(self) -> BoardSettings:
        return BoardSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with a
    "<name>_error" entry for each failure. Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "board", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
