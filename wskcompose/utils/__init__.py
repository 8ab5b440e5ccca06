"""
Utilities for wskcompose.

Leaf helpers used by the composers: environment substitution, runtime
tables, limit validation, web-export shaping, archiving and the managed
annotation.
"""

from .archive import temporary_archive, zip_directory
from .env import convert_single_name, get_env_var, interpolate
from .limits import compose_limits
from .managed import build_managed_annotation
from .runtimes import RuntimeDecision, reconcile_runtime
from .webaction import web_action

__all__ = [
    "RuntimeDecision",
    "build_managed_annotation",
    "compose_limits",
    "convert_single_name",
    "get_env_var",
    "interpolate",
    "reconcile_runtime",
    "temporary_archive",
    "web_action",
    "zip_directory",
]
