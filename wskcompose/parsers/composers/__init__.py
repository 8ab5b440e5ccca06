"""
Single-package composers.

Each composer converts one section of one package into platform entities.
ManifestParser fans them out across every package of a manifest.
"""

from .actions import compose_action, compose_actions
from .apis import compose_api_records
from .dependencies import compose_dependencies
from .packages import compose_package
from .rules import compose_rules
from .sequences import compose_sequences, qualify_action_name
from .triggers import compose_triggers

__all__ = [
    "compose_action",
    "compose_actions",
    "compose_api_records",
    "compose_dependencies",
    "compose_package",
    "compose_rules",
    "compose_sequences",
    "compose_triggers",
    "qualify_action_name",
]
