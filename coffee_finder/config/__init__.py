"""
Configuration package for Coffee Finder.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    LocationPolicy,
    RefreshSettings,
    PresentationSettings,
    NominatimSettings,
    OSRMSettings,
    SecuritySettings,
    settings,
    get_settings,
    reload_settings,
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "LocationPolicy",
    "RefreshSettings",
    "PresentationSettings",
    "NominatimSettings",
    "OSRMSettings",
    "SecuritySettings",
    "settings",
    "get_settings",
    "reload_settings",
]
