"""
Rule Composer.

The rule's action is qualified with the owning package the same way
sequence components are.
"""

from __future__ import annotations

from wskcompose.parsers.composers.sequences import qualify_action_name
from wskcompose.parsers.parameters import resolve_annotations
from wskcompose.schemas.manifest import PackageSpec
from wskcompose.utils.env import convert_single_name
from wskcompose.whisk.entities import Rule


def compose_rules(pkg: PackageSpec, package_name: str) -> list[Rule]:
    return [
        Rule(
            name=convert_single_name(spec.name),
            trigger=convert_single_name(spec.trigger),
            action=qualify_action_name(convert_single_name(spec.action), package_name),
            annotations=resolve_annotations(spec.annotations),
        )
        for spec in pkg.get_rule_list()
    ]
