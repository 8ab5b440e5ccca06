"""
Composition records.

Composers return entities wrapped with the context needed to trace them
back to the manifest: owning package and source location.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .entities import Action, KeyValue


@dataclass
class ActionRecord:
    """
    A composed action (or sequence) with its owning package.

    Attributes:
        action: Platform action entity
        package_name: Package the action was declared in
        filepath: Resolved function path for actions, sequence name for sequences
    """

    action: Action
    package_name: str
    filepath: str = ""


@dataclass
class DependencyRecord:
    """
    A composed package dependency.

    Exactly one of the two kinds:
        binding: location is a system package reference (/whisk.system/...)
        remote:  location is an https:// repository URL
    """

    project_path: str
    package_name: str
    location: str
    version: str
    parameters: list[KeyValue] = field(default_factory=list)
    annotations: list[KeyValue] = field(default_factory=list)
    is_binding: bool = False
    base_repo: str = ""
    sub_folder: str = ""
