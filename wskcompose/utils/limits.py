"""
Action limit validation.

Supported limits are checked against platform bounds; an out-of-range
value is dropped with a warning. Unsupported limits only produce a warning.
"""

from __future__ import annotations

import logging

from wskcompose.config.platform import LIMIT_BOUNDS, UNSUPPORTED_LIMITS
from wskcompose.schemas.manifest import LimitsSpec
from wskcompose.whisk.entities import Limits

logger = logging.getLogger(__name__)

# manifest limit name -> (LimitsSpec attribute, Limits attribute)
SUPPORTED_LIMIT_FIELDS: dict[str, tuple[str, str]] = {
    "timeout": ("timeout", "timeout"),
    "memorySize": ("memory_size", "memory"),
    "logSize": ("log_size", "logs"),
}

UNSUPPORTED_LIMIT_FIELDS: dict[str, str] = {
    "concurrentActivations": "concurrent_activations",
    "userInvocationRate": "user_invocation_rate",
    "codeSize": "code_size",
    "parameterSize": "parameter_size",
}


def is_limit_valid(name: str, value: int | None) -> bool:
    """An unset limit is valid; a set one must be within bounds."""
    if value is None:
        return True
    low, high = LIMIT_BOUNDS[name]
    return low <= value <= high


def compose_limits(spec: LimitsSpec, action: str = "") -> Limits | None:
    """
    Build platform limits from a declaration.

    Returns:
        Limits with the valid fields, or None when no field survived
    """
    limits = Limits()
    for name, (spec_attr, limit_attr) in SUPPORTED_LIMIT_FIELDS.items():
        value = getattr(spec, spec_attr)
        if is_limit_valid(name, value):
            setattr(limits, limit_attr, value)
        else:
            low, high = LIMIT_BOUNDS[name]
            logger.warning(
                f"[limits] Action [{action}] limit [{name}]={value} is outside "
                f"[{low}, {high}] and is ignored"
            )

    for name in UNSUPPORTED_LIMITS:
        value = getattr(spec, UNSUPPORTED_LIMIT_FIELDS[name])
        if value:
            logger.warning(f"[limits] Action [{action}] limit [{name}] is not supported and is ignored")

    return None if limits.is_empty() else limits
