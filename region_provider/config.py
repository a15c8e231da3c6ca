"""Configuration management for the region data layer.

This module provides centralized configuration using Pydantic Settings,
supporting environment variables and .env files.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RegionSettings(BaseSettings):
    """Region plugin loading settings."""

    configs_dir: Path = Field(
        default=Path("regions"),
        description="Directory holding region config files (JSON or YAML)",
    )
    local_region: Optional[str] = Field(
        default=None,
        description="Name of the local region config to load; first non-federal config if unset",
    )
    federal_name: str = Field(default="federal", min_length=1)
    fallback_to_example: bool = Field(
        default=True,
        description="Register the example plugin when no local region can be loaded",
    )

    model_config = SettingsConfigDict(env_prefix="REGION_")


class ObservabilitySettings(BaseSettings):
    """Logging settings."""

    level: str = Field(default="INFO")
    format: Literal["json", "console"] = Field(default="json")

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()

    model_config = SettingsConfigDict(env_prefix="LOG_")


class Settings(BaseSettings):
    """Main application settings."""

    region: RegionSettings = Field(default_factory=RegionSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()


def reload_settings() -> Settings:
    """Reload settings from environment.

    Returns:
        Fresh Settings instance
    """
    get_settings.cache_clear()
    return get_settings()
