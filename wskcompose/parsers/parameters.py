"""
Parameter Resolver.

Turns one input/output declaration into the concrete value sent to the
platform, or None when the entry must be omitted.

Resolution order:
    1. inline `value`, else `default`
    2. environment references ($VAR, ${VAR}) substituted, also inside
       nested mappings and lists
    3. a declared type with nothing to resolve yields the type's zero value;
       no type and no value yields None
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from wskcompose.errors import ParameterResolutionError
from wskcompose.schemas.params import (
    PARAM_TYPE_BOOLEAN,
    PARAM_TYPE_DEFAULTS,
    PARAM_TYPE_FLOAT,
    PARAM_TYPE_INTEGER,
    PARAM_TYPE_JSON,
    PARAM_TYPE_STRING,
    ParamSpec,
)
from wskcompose.utils.env import get_env_var, has_env_reference, interpolate
from wskcompose.whisk.entities import KeyValue

logger = logging.getLogger(__name__)


def type_name(value: Any) -> str | None:
    """Parameter type name of a Python value, or None if unsupported."""
    if isinstance(value, bool):
        return PARAM_TYPE_BOOLEAN
    if isinstance(value, int):
        return PARAM_TYPE_INTEGER
    if isinstance(value, float):
        return PARAM_TYPE_FLOAT
    if isinstance(value, str):
        return PARAM_TYPE_STRING
    if isinstance(value, (dict, list)):
        return PARAM_TYPE_JSON
    return None


def _type_matches(declared: str, actual: str) -> bool:
    if declared == actual:
        return True
    # YAML reads `1` as an integer even where a float is declared
    return declared == PARAM_TYPE_FLOAT and actual == PARAM_TYPE_INTEGER


def _json_keys(value: Any) -> Any:
    """YAML allows non-string mapping keys; JSON does not."""
    if isinstance(value, dict):
        return {str(key): _json_keys(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_json_keys(item) for item in value]
    return value


def resolve_parameter(name: str, param: ParamSpec, file_path: str) -> Any:
    """
    Resolve a declaration to a concrete value.

    Args:
        name: Parameter name, for error context
        param: The declaration
        file_path: Manifest path, for error context

    Returns:
        The value, or None when the parameter must be omitted

    Raises:
        ParameterResolutionError: Unknown declared type, unsupported value
            or a value that contradicts the declared type
    """
    declared = param.type or ""
    if declared and declared not in PARAM_TYPE_DEFAULTS:
        raise ParameterResolutionError(
            name,
            file_path,
            f"invalid type [{declared}], expected one of {', '.join(PARAM_TYPE_DEFAULTS)}",
        )

    value = param.value if param.value is not None else param.default
    if value is None:
        if declared:
            return copy.deepcopy(PARAM_TYPE_DEFAULTS[declared])
        return None

    actual = type_name(value)
    if actual is None:
        raise ParameterResolutionError(
            name,
            file_path,
            f"unsupported value of type [{type(value).__name__}]",
        )

    if declared and not has_env_reference(value) and not _type_matches(declared, actual):
        raise ParameterResolutionError(
            name,
            file_path,
            f"value of type [{actual}] does not match declared type [{declared}]",
        )

    resolved = interpolate(value)
    if actual == PARAM_TYPE_JSON:
        resolved = _json_keys(resolved)

    logger.debug(f"[parameters] Resolved {name}={resolved!r}")
    return resolved


def resolve_parameters(params: dict[str, ParamSpec], file_path: str) -> list[KeyValue]:
    """
    Resolve a mapping of declarations into key/value entries.

    Entries resolving to None are omitted.
    """
    key_values = []
    for name, param in params.items():
        value = resolve_parameter(name, param, file_path)
        if value is not None:
            key_values.append(KeyValue(key=name, value=value))
    return key_values


def resolve_annotations(annotations: dict[str, Any]) -> list[KeyValue]:
    """Annotations keep their raw values with environment references substituted."""
    return [KeyValue(key=name, value=get_env_var(value)) for name, value in annotations.items()]
