"""
Sequence Composer.

A sequence is an action of kind "sequence" that runs its components in
the declared order. `actions: a, pkg/b` in package `p` under namespace `n`
becomes components ["/n/p/a", "/n/pkg/b"].
"""

from __future__ import annotations

import logging
import posixpath

from wskcompose.config.platform import SEQUENCE_KIND
from wskcompose.parsers.parameters import resolve_annotations
from wskcompose.schemas.manifest import SequenceSpec
from wskcompose.whisk.entities import Action, Exec, KeyValue
from wskcompose.whisk.records import ActionRecord

logger = logging.getLogger(__name__)


def qualify_action_name(action: str, package_name: str) -> str:
    """Prefix a bare action name with its package; qualified names pass through."""
    action = action.strip()
    if "/" not in action and not action.startswith(package_name + "/"):
        action = posixpath.join(package_name, action)
    return action


def sequence_components(actions: str, namespace: str, package_name: str) -> list[str]:
    """Fully qualified component paths, in declaration order, duplicates kept."""
    return [
        posixpath.normpath("/" + f"{namespace}/{qualify_action_name(action, package_name)}".lstrip("/"))
        for action in actions.split(",")
    ]


def compose_sequences(
    namespace: str,
    sequences: dict[str, SequenceSpec],
    package_name: str,
    *,
    managed_annotation: KeyValue | None = None,
) -> list[ActionRecord]:
    records = []
    for name, sequence in sequences.items():
        action = Action(
            name=name,
            namespace=namespace,
            exec=Exec(
                kind=SEQUENCE_KIND,
                components=sequence_components(sequence.actions, namespace, package_name),
            ),
            annotations=resolve_annotations(sequence.annotations),
        )
        if managed_annotation is not None:
            action.annotations.append(managed_annotation.model_copy(deep=True))

        logger.debug(f"[sequences] Composed {package_name}/{name} | components={action.exec.components}")
        records.append(ActionRecord(action=action, package_name=package_name, filepath=name))
    return records
