"""
Entity Set Builder.

Runs every composer over a manifest and groups the results per package,
producing the DeploymentProject that the deployment reader and the
external client consume.

Usage:
    builder = EntitySetBuilder(settings)
    project = builder.build(parse_manifest("manifest.yaml"))

    for name, pkg in project.packages.items():
        print(name, list(pkg.actions))
"""

from __future__ import annotations

import logging
from pathlib import Path

from wskcompose.config.schemas import ComposerSettings
from wskcompose.parsers.composers import (
    compose_actions,
    compose_api_records,
    compose_dependencies,
    compose_package,
    compose_rules,
    compose_sequences,
    compose_triggers,
)
from wskcompose.parsers.manifest_parser import ManifestParser
from wskcompose.schemas.manifest import ManifestDocument, resolve_packages

from .deployment import DeploymentProject, PackageDeployment

logger = logging.getLogger(__name__)


class EntitySetBuilder:
    """
    Builds a DeploymentProject from a parsed manifest.

    Composition is fail-fast: the first package that fails to compose
    aborts the build and nothing is returned.

    Example:
        builder = EntitySetBuilder(ComposerSettings(strict=True))
        project = builder.build(manifest)
    """

    def __init__(self, settings: ComposerSettings | None = None):
        """
        Initialize builder.

        Args:
            settings: Composition flags; defaults are used when omitted
        """
        self._parser = ManifestParser(settings)

    @property
    def settings(self) -> ComposerSettings:
        return self._parser.settings

    def build(self, manifest: ManifestDocument) -> DeploymentProject:
        settings = self.settings
        project_path = str(Path(manifest.filepath).parent) if manifest.filepath else "."
        project = DeploymentProject(name=settings.project_name or manifest.get_project().name)

        if manifest.uses_deprecated_package():
            logger.warning(
                "[builder] Key [package] in manifest will soon be deprecated, use [packages] instead"
            )

        ma = self._parser.managed_annotation(manifest)

        for name, pkg in resolve_packages(manifest).items():
            deployment = PackageDeployment(
                package=compose_package(pkg, name, manifest.filepath, managed_annotation=ma),
            )

            for record in compose_actions(
                manifest.filepath,
                pkg.actions,
                name,
                strict=settings.strict,
                managed_annotation=ma,
            ):
                deployment.actions[record.action.name] = record

            for record in compose_sequences(settings.namespace, pkg.sequences, name, managed_annotation=ma):
                deployment.sequences[record.action.name] = record

            for trigger in compose_triggers(manifest.filepath, pkg, managed_annotation=ma):
                deployment.triggers[trigger.name] = trigger

            for rule in compose_rules(pkg, name):
                deployment.rules[rule.name] = rule

            deployment.dependencies = compose_dependencies(pkg, project_path, manifest.filepath, name)
            deployment.apis = compose_api_records(pkg)

            project.packages[name] = deployment
            logger.info(
                f"[builder] Composed package {name} | actions={len(deployment.actions)} | "
                f"sequences={len(deployment.sequences)} | triggers={len(deployment.triggers)} | "
                f"rules={len(deployment.rules)} | apis={len(deployment.apis)}"
            )

        return project
