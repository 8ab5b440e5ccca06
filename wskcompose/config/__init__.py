"""
Configuration for wskcompose.

- ComposerSettings: process-wide flags passed into every composer
- get_settings: settings from WSKCOMPOSE_* environment variables
- platform: static runtime, limit and package tables
"""

from . import platform
from .schemas import ComposerSettings
from .settings import get_settings

__all__ = [
    "ComposerSettings",
    "get_settings",
    "platform",
]
