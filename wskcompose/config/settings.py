"""
Settings loading.

Builds ComposerSettings from WSKCOMPOSE_* environment variables.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from .schemas import ComposerSettings

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@lru_cache()
def get_settings() -> ComposerSettings:
    """
    Get composer settings from environment.

    Uses lru_cache for singleton pattern. Call get_settings.cache_clear()
    after changing the environment.
    """
    settings = ComposerSettings(
        managed=_env_flag("WSKCOMPOSE_MANAGED"),
        strict=_env_flag("WSKCOMPOSE_STRICT"),
        namespace=os.getenv("WSKCOMPOSE_NAMESPACE", "_"),
        project_name=os.getenv("WSKCOMPOSE_PROJECT_NAME", ""),
        skip_mismatched_packages=_env_flag("WSKCOMPOSE_SKIP_MISMATCHED_PACKAGES"),
    )
    logger.debug(f"[settings] Loaded settings: {settings}")
    return settings
