"""
Environment variable substitution.

Manifest values may reference the environment as `$VAR` or `${VAR}`.
Unset variables resolve to an empty string.
"""

from __future__ import annotations

import logging
import os
import re
from typing import Any

logger = logging.getLogger(__name__)

_ENV_REFERENCE = re.compile(r"\$\{(\w+)\}|\$(\w+)")


def _lookup(name: str) -> str:
    value = os.environ.get(name)
    if value is None:
        logger.warning(f"[env] Environment variable {name} is not set, using empty string")
        return ""
    return value


def _substitute(text: str) -> str:
    return _ENV_REFERENCE.sub(lambda m: _lookup(m.group(1) or m.group(2)), text)


def has_env_reference(value: Any) -> bool:
    return isinstance(value, str) and _ENV_REFERENCE.search(value) is not None


def get_env_var(value: Any) -> Any:
    """
    Substitute environment references in a scalar value.

    Non-string values are returned unchanged.
    """
    if not isinstance(value, str):
        return value
    return _substitute(value)


def interpolate(value: Any) -> Any:
    """Substitute environment references anywhere inside nested dicts and lists."""
    if isinstance(value, str):
        return _substitute(value)
    if isinstance(value, dict):
        return {key: interpolate(item) for key, item in value.items()}
    if isinstance(value, list):
        return [interpolate(item) for item in value]
    return value


def convert_single_name(name: str) -> str:
    """Resolve an entity name that may be given as an environment reference."""
    return str(get_env_var(name))
