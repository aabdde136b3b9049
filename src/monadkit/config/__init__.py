"""Configuration management using pydantic-settings."""

from .settings import (
    LawSettings,
    LoggingSettings,
    MonadkitSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "LawSettings",
    "LoggingSettings",
    "MonadkitSettings",
    "clear_settings_cache",
    "get_settings",
]
