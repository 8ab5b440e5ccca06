"""
Manifest Aggregator.

Fans the single-package composers out over every package of a manifest.
The authoritative package map is resolved once per call with
`resolve_packages`; the first failing package aborts the whole call.

Usage:
    parser = ManifestParser(settings)
    manifest = parser.parse_manifest("manifest.yaml")

    packages = parser.compose_all_packages(manifest)
    actions = parser.compose_actions_from_all_packages(manifest)
    sequences = parser.compose_sequences_from_all_packages(manifest)
"""

from __future__ import annotations

import logging
from pathlib import Path

from wskcompose.config.schemas import ComposerSettings
from wskcompose.schemas.manifest import ManifestDocument, PackageSpec, resolve_packages
from wskcompose.utils.managed import build_managed_annotation
from wskcompose.whisk.entities import ApiCreateRequest, KeyValue, Package, Rule, Trigger
from wskcompose.whisk.records import ActionRecord, DependencyRecord

from . import loader
from .composers import (
    compose_actions,
    compose_api_records,
    compose_dependencies,
    compose_package,
    compose_rules,
    compose_sequences,
    compose_triggers,
)

logger = logging.getLogger(__name__)


class ManifestParser:
    """
    Composes platform entities from a manifest.

    Settings are passed in explicitly; nothing is read from process state
    during composition.

    Example:
        parser = ManifestParser(ComposerSettings(managed=True, project_name="demo"))
        manifest = parser.parse_manifest("manifest.yaml")
        records = parser.compose_actions_from_all_packages(manifest)
    """

    def __init__(self, settings: ComposerSettings | None = None):
        self._settings = settings or ComposerSettings()

    @property
    def settings(self) -> ComposerSettings:
        return self._settings

    # ==================== Loading ====================

    def parse_manifest(self, path: str | Path) -> ManifestDocument:
        return loader.parse_manifest(path)

    def parse_deployment(self, path: str | Path) -> ManifestDocument:
        return loader.parse_deployment(path)

    # ==================== Helpers ====================

    def managed_annotation(self, manifest: ManifestDocument) -> KeyValue | None:
        """The managed annotation for this manifest, or None outside managed mode."""
        if not self._settings.managed:
            return None
        project_name = self._settings.project_name or manifest.get_project().name
        return build_managed_annotation(project_name, manifest.filepath)

    # ==================== Dependencies ====================

    def compose_dependencies_from_all_packages(
        self,
        manifest: ManifestDocument,
        project_path: str,
    ) -> dict[str, DependencyRecord]:
        dependencies: dict[str, DependencyRecord] = {}
        for name, pkg in resolve_packages(manifest).items():
            dependencies.update(self.compose_dependencies(pkg, project_path, manifest.filepath, name))
        return dependencies

    def compose_dependencies(
        self,
        pkg: PackageSpec,
        project_path: str,
        file_path: str,
        package_name: str,
    ) -> dict[str, DependencyRecord]:
        return compose_dependencies(pkg, project_path, file_path, package_name)

    # ==================== Packages ====================

    def compose_all_packages(self, manifest: ManifestDocument) -> dict[str, Package]:
        if manifest.uses_deprecated_package():
            logger.warning(
                "[manifest_parser] Key [package] in manifest will soon be deprecated, "
                "use [packages] instead"
            )

        ma = self.managed_annotation(manifest)
        return {
            name: compose_package(pkg, name, manifest.filepath, managed_annotation=ma)
            for name, pkg in resolve_packages(manifest).items()
        }

    def compose_package(self, manifest: ManifestDocument, pkg: PackageSpec, package_name: str) -> Package:
        return compose_package(
            pkg,
            package_name,
            manifest.filepath,
            managed_annotation=self.managed_annotation(manifest),
        )

    # ==================== Actions ====================

    def compose_actions_from_all_packages(self, manifest: ManifestDocument) -> list[ActionRecord]:
        ma = self.managed_annotation(manifest)
        records: list[ActionRecord] = []
        for name, pkg in resolve_packages(manifest).items():
            records.extend(
                compose_actions(
                    manifest.filepath,
                    pkg.actions,
                    name,
                    strict=self._settings.strict,
                    managed_annotation=ma,
                )
            )
        return records

    # ==================== Sequences ====================

    def compose_sequences_from_all_packages(
        self,
        manifest: ManifestDocument,
        namespace: str | None = None,
    ) -> list[ActionRecord]:
        namespace = self._settings.namespace if namespace is None else namespace
        ma = self.managed_annotation(manifest)
        records: list[ActionRecord] = []
        for name, pkg in resolve_packages(manifest).items():
            records.extend(compose_sequences(namespace, pkg.sequences, name, managed_annotation=ma))
        return records

    # ==================== Triggers ====================

    def compose_triggers_from_all_packages(self, manifest: ManifestDocument) -> list[Trigger]:
        ma = self.managed_annotation(manifest)
        triggers: list[Trigger] = []
        for pkg in resolve_packages(manifest).values():
            triggers.extend(compose_triggers(manifest.filepath, pkg, managed_annotation=ma))
        return triggers

    # ==================== Rules ====================

    def compose_rules_from_all_packages(self, manifest: ManifestDocument) -> list[Rule]:
        rules: list[Rule] = []
        for name, pkg in resolve_packages(manifest).items():
            rules.extend(compose_rules(pkg, name))
        return rules

    # ==================== APIs ====================

    def compose_api_records_from_all_packages(self, manifest: ManifestDocument) -> list[ApiCreateRequest]:
        requests: list[ApiCreateRequest] = []
        for pkg in resolve_packages(manifest).values():
            requests.extend(compose_api_records(pkg))
        return requests
