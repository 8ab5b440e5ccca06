"""
Platform entities.

Payload models for the control-plane API and the records composers
return around them.
"""

from .entities import (
    Action,
    Api,
    ApiAction,
    ApiCreateRequest,
    Exec,
    KeyValue,
    Limits,
    Package,
    Rule,
    Trigger,
    WhiskEntity,
)
from .records import ActionRecord, DependencyRecord

__all__ = [
    "Action",
    "ActionRecord",
    "Api",
    "ApiAction",
    "ApiCreateRequest",
    "DependencyRecord",
    "Exec",
    "KeyValue",
    "Limits",
    "Package",
    "Rule",
    "Trigger",
    "WhiskEntity",
]
