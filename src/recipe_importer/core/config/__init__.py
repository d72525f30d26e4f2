"""Configuration module with YAML and environment variable support."""

from .settings import (
    ApiSettings,
    AppSettings,
    LoggingSettings,
    RecipeImportSettings,
    ServerSettings,
    Settings,
    get_settings,
)


__all__ = [
    "ApiSettings",
    "AppSettings",
    "LoggingSettings",
    "RecipeImportSettings",
    "ServerSettings",
    "Settings",
    "get_settings",
]
