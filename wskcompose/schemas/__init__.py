"""
Manifest Schemas.

Typed models for manifest and deployment documents.
"""

from .manifest import (
    ActionSpec,
    DependencySpec,
    LimitsSpec,
    ManifestDocument,
    PackageSpec,
    ProjectSpec,
    RuleSpec,
    SequenceSpec,
    TriggerSpec,
    resolve_packages,
)
from .params import ParamSpec

__all__ = [
    "ActionSpec",
    "DependencySpec",
    "LimitsSpec",
    "ManifestDocument",
    "PackageSpec",
    "ParamSpec",
    "ProjectSpec",
    "RuleSpec",
    "SequenceSpec",
    "TriggerSpec",
    "resolve_packages",
]
