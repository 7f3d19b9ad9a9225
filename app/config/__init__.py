"""
Configuration package for the Map Explorer backend.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    GeocoderSettings,
    ContentSettings,
    MapSettings,
    SecuritySettings,
    settings,
    get_settings,
    use_settings,
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "GeocoderSettings",
    "ContentSettings",
    "MapSettings",
    "SecuritySettings",
    "settings",
    "get_settings",
    "use_settings",
]
