"""Environment-based configuration using pydantic-settings.

Example:
    >>> from monadkit.config import get_settings
    >>> settings = get_settings()
    >>> settings.laws.trials
    100

    # Or with environment variables:
    # MONADKIT_LAWS_TRIALS=500
    # MONADKIT_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, NonNegativeInt, PositiveInt, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MONADKIT_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["console", "json", "none"] = "console"


class LawSettings(BaseSettings):
    """Defaults for the law-verification harness."""

    model_config = SettingsConfigDict(
        env_prefix="MONADKIT_LAWS_",
        extra="ignore",
    )

    trials: PositiveInt = Field(default=100, description="Maximum hypothesis examples per law")
    seed: NonNegativeInt = Field(default=0, description="Hypothesis seed for every law run")
    workers: PositiveInt = Field(default=1, description="Laws checked concurrently")
    max_size: PositiveInt = Field(default=8, description="Upper bound for generated collections and strings")
    allow_nan: bool = Field(default=False, description="Let float strategies produce NaN")

    @computed_field
    @property
    def parallel(self) -> bool:
        return self.workers > 1


class MonadkitSettings(BaseSettings):
    """Root settings, loaded from MONADKIT_* variables and an optional .env file."""

    model_config = SettingsConfigDict(
        env_prefix="MONADKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    laws: LawSettings = Field(default_factory=LawSettings)


@lru_cache(maxsize=1)
def get_settings() -> MonadkitSettings:
    """Get the global settings instance (cached)."""
    return MonadkitSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
