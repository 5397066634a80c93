"""
Settings package for EOR Database.

This package provides a modular, type-safe configuration management system
using Qt's QSettings with an INI file for storage.

Usage:
    from eor_database.settings import AppSettings, ValidationResult

    settings = AppSettings("eor_database.ini")
    result = settings.validate()
"""

from .core import AppSettings
from .types import ConfigVersion, ConfigError, ValidationResult
from .paths import PathSettings
from .refresh import RefreshSettings
from .browse import BrowseSettings

__all__ = [
    "AppSettings",
    "ConfigVersion",
    "ConfigError",
    "ValidationResult",
    "PathSettings",
    "RefreshSettings",
    "BrowseSettings",
]
