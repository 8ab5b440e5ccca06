"""
Platform Entity Schemas.

Pydantic models for the entities submitted to the control-plane API.
Field names are snake_case in Python; `to_payload()` produces the
platform's JSON keys.

Every entity is created unpublished. Parameter and annotation lists are
order-irrelevant for the platform but keys are unique within a list.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class WhiskEntity(BaseModel):
    """Base for all platform payload models."""

    class Config:
        populate_by_name = True

    def to_payload(self) -> dict[str, Any]:
        """Serialize with platform keys, dropping unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class KeyValue(WhiskEntity):
    """A single parameter or annotation entry."""

    key: str
    value: Any = None


# =============================================================================
# Key/value list helpers
# =============================================================================


def get_value(key_values: list[KeyValue], key: str) -> Any:
    """Return the value stored under key, or None."""
    for kv in key_values:
        if kv.key == key:
            return kv.value
    return None


def find_key(key_values: list[KeyValue], key: str) -> KeyValue | None:
    """Return the entry stored under key, or None."""
    for kv in key_values:
        if kv.key == key:
            return kv
    return None


def delete_key(key: str, key_values: list[KeyValue]) -> list[KeyValue]:
    """Return a copy of the list without any entry for key."""
    return [kv for kv in key_values if kv.key != key]


def add_key_value(key: str, value: Any, key_values: list[KeyValue]) -> list[KeyValue]:
    """Return a copy of the list with key appended."""
    return [*key_values, KeyValue(key=key, value=value)]


def to_dict(key_values: list[KeyValue]) -> dict[str, Any]:
    """Flatten a key/value list into a dict."""
    return {kv.key: kv.value for kv in key_values}


# =============================================================================
# Entities
# =============================================================================


class Exec(WhiskEntity):
    """
    Executable payload of an action.

    A code action carries kind + code (+ main for multi-entry runtimes).
    A sequence carries kind "sequence" + ordered fully-qualified components.
    """

    kind: str = ""
    code: str | None = None
    main: str | None = None
    components: list[str] | None = None
    binary: bool | None = None


class Limits(WhiskEntity):
    """Action limits. Unset fields keep the platform defaults."""

    timeout: int | None = None
    memory: int | None = None
    logs: int | None = None

    def is_empty(self) -> bool:
        return self.timeout is None and self.memory is None and self.logs is None


class Action(WhiskEntity):
    name: str
    namespace: str = ""
    publish: bool = False
    exec: Exec = Field(default_factory=Exec)
    parameters: list[KeyValue] = Field(default_factory=list)
    annotations: list[KeyValue] = Field(default_factory=list)
    limits: Limits | None = None


class Package(WhiskEntity):
    name: str
    namespace: str = ""
    publish: bool = False
    parameters: list[KeyValue] = Field(default_factory=list)
    annotations: list[KeyValue] = Field(default_factory=list)


class Trigger(WhiskEntity):
    name: str
    namespace: str = ""
    publish: bool = False
    parameters: list[KeyValue] = Field(default_factory=list)
    annotations: list[KeyValue] = Field(default_factory=list)


class Rule(WhiskEntity):
    name: str
    namespace: str = ""
    publish: bool = False
    trigger: str
    action: str
    annotations: list[KeyValue] = Field(default_factory=list)


class ApiAction(WhiskEntity):
    """Backend action behind an API endpoint."""

    name: str
    namespace: str = ""
    backend_method: str = Field("", alias="backendMethod")
    backend_url: str = Field("", alias="backendUrl")


class Api(WhiskEntity):
    api_name: str = Field(..., alias="apiName")
    gateway_base_path: str = Field(..., alias="gatewayBasePath")
    gateway_rel_path: str = Field(..., alias="gatewayPath")
    gateway_method: str = Field(..., alias="gatewayMethod")
    action: ApiAction
    response_type: str = Field("json", alias="responsetype")


class ApiCreateRequest(WhiskEntity):
    api_doc: Api = Field(..., alias="apidoc")
