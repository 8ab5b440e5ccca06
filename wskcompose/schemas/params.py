"""
Parameter Declaration Schema.

Inputs and outputs can be declared two ways in a manifest:

    inputs:
        greeting: Hello                 # single-line: the value itself
        name:                           # multi-line: a typed declaration
            type: string
            description: name of a person
            default: Alex

A mapping is treated as a multi-line declaration only when every key is a
declaration field. Any other mapping is a single-line JSON value.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

PARAM_TYPE_STRING = "string"
PARAM_TYPE_INTEGER = "integer"
PARAM_TYPE_FLOAT = "float"
PARAM_TYPE_BOOLEAN = "boolean"
PARAM_TYPE_JSON = "json"

# declared type -> value used when nothing else resolves
PARAM_TYPE_DEFAULTS: dict[str, Any] = {
    PARAM_TYPE_STRING: "",
    PARAM_TYPE_INTEGER: 0,
    PARAM_TYPE_FLOAT: 0.0,
    PARAM_TYPE_BOOLEAN: False,
    PARAM_TYPE_JSON: {},
}

DECLARATION_FIELDS = frozenset(
    {"type", "description", "value", "default", "required", "status", "schema"}
)


class ParamSpec(BaseModel):
    """
    A single input or output declaration.

    Attributes:
        multiline: True when declared with type/value/default fields
        type: Declared type name (empty when not declared)
        description: Free text, not sent to the platform
        value: Inline value
        default: Value used when no inline value is given
        required: Informational flag
    """

    multiline: bool = Field(False, exclude=True)
    type: str | None = ""
    description: str | None = ""
    value: Any = None
    default: Any = None
    required: bool = False
    status: str | None = ""
    schema_: Any = Field(default=None, alias="schema")

    class Config:
        populate_by_name = True

    @classmethod
    def from_raw(cls, raw: Any) -> ParamSpec:
        """Build a declaration from the raw YAML value."""
        if isinstance(raw, ParamSpec):
            return raw
        if isinstance(raw, dict) and raw and set(raw) <= DECLARATION_FIELDS:
            return cls.model_validate({**raw, "multiline": True})
        return cls(value=raw)


def params_from_raw(raw: Any) -> dict[str, ParamSpec]:
    """Convert a raw `inputs`/`outputs` mapping into declarations."""
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError("parameters must be a mapping of name to value or declaration")
    return {str(name): ParamSpec.from_raw(value) for name, value in raw.items()}
