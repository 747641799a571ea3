"""Configuration module for grailclient."""

from .settings import (
    ApiSettings,
    CatalogSettings,
    ObservabilitySettings,
    Settings,
    get_settings,
)

__all__ = [
    "ApiSettings",
    "CatalogSettings",
    "ObservabilitySettings",
    "Settings",
    "get_settings",
]
