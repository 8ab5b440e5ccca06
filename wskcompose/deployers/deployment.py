"""
Composed entity set.

The in-memory result of composing a manifest, grouped per package. The
deployment reader mutates it in place; an external client submits it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from wskcompose.whisk.entities import ApiCreateRequest, Package, Rule, Trigger
from wskcompose.whisk.records import ActionRecord, DependencyRecord


@dataclass
class PackageDeployment:
    """
    Everything composed for one package.

    Attributes:
        package: The platform package entity
        actions: Action records keyed by action name
        sequences: Sequence records keyed by sequence name
        triggers: Triggers keyed by trigger name
        rules: Rules keyed by rule name
        dependencies: Dependency records keyed by "package:dependency"
        apis: API create requests for this package
    """

    package: Package
    actions: dict[str, ActionRecord] = field(default_factory=dict)
    sequences: dict[str, ActionRecord] = field(default_factory=dict)
    triggers: dict[str, Trigger] = field(default_factory=dict)
    rules: dict[str, Rule] = field(default_factory=dict)
    dependencies: dict[str, DependencyRecord] = field(default_factory=dict)
    apis: list[ApiCreateRequest] = field(default_factory=list)


@dataclass
class DeploymentProject:
    """Composed packages of one manifest, keyed by package name."""

    name: str = ""
    packages: dict[str, PackageDeployment] = field(default_factory=dict)

    @property
    def triggers(self) -> dict[str, Trigger]:
        """Triggers across all packages, keyed by trigger name."""
        return {name: trigger for pkg in self.packages.values() for name, trigger in pkg.triggers.items()}

    @property
    def rules(self) -> dict[str, Rule]:
        """Rules across all packages, keyed by rule name."""
        return {name: rule for pkg in self.packages.values() for name, rule in pkg.rules.items()}

    @property
    def apis(self) -> list[ApiCreateRequest]:
        return [api for pkg in self.packages.values() for api in pkg.apis]
