"""
Settings package for wbox-mapgen.

Type-safe configuration management using Qt's QSettings for
cross-platform storage of converter defaults.

Usage:
    from wbox_mapgen.settings import AppSettings

    settings = AppSettings()
    result = settings.validate()
"""

from .core import AppSettings
from .types import ConfigVersion, ValidationResult
from .paths import PathSettings
from .conversion import ConversionSettings
from .logging import LoggingSettings

__all__ = [
    "AppSettings",
    "ConfigVersion",
    "ValidationResult",
    "PathSettings",
    "ConversionSettings",
    "LoggingSettings",
]
