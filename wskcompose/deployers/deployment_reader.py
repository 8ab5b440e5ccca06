"""
Deployment Reader.

Binds a deployment file onto an already composed DeploymentProject.
Packages, actions and triggers are merged independently with two rules:

    inputs:       deployment values win, manifest-only keys are kept
                  after them in their original order, and new keys
                  may be introduced
    annotations:  only keys already present on the composed entity may
                  be overwritten; an unknown key is a format error

The project is mutated in place.

Usage:
    project = EntitySetBuilder(settings).build(manifest)
    reader = DeploymentReader(project, parse_deployment("deployment.yaml"), settings)
    reader.bind_assets()
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from wskcompose.config.schemas import ComposerSettings
from wskcompose.errors import YAMLFileFormatError
from wskcompose.schemas.manifest import ManifestDocument, PackageSpec, resolve_packages
from wskcompose.schemas.params import ParamSpec
from wskcompose.utils.env import get_env_var
from wskcompose.whisk.entities import KeyValue, find_key

from .deployment import DeploymentProject, PackageDeployment

logger = logging.getLogger(__name__)


def merge_inputs(deployed: dict[str, ParamSpec], composed: list[KeyValue]) -> list[KeyValue]:
    """
    Merge deployment inputs over composed parameters.

    Deployment values only go through environment substitution, not full
    parameter resolution.
    """
    merged = [KeyValue(key=name, value=get_env_var(param.value)) for name, param in deployed.items()]
    keys = {kv.key for kv in merged}
    merged.extend(kv for kv in composed if kv.key not in keys)
    return merged


def merge_annotations(deployed: dict[str, Any], composed: list[KeyValue], deployment_path: str) -> None:
    """
    Overwrite composed annotations with deployment values in place.

    Raises:
        YAMLFileFormatError: A deployment annotation key is not present
            on the composed entity
    """
    for name, value in deployed.items():
        existing = find_key(composed, name)
        if existing is None:
            raise YAMLFileFormatError(
                deployment_path,
                f'Annotation key "{name}" does not exist in manifest file but specified in deployment file.',
            )
        existing.value = value


class DeploymentReader:
    """
    Applies deployment overrides to a composed project.

    Example:
        reader = DeploymentReader(project, deployment)
        reader.bind_assets()
    """

    def __init__(
        self,
        project: DeploymentProject,
        deployment: ManifestDocument,
        settings: ComposerSettings | None = None,
    ):
        self.project = project
        self.deployment = deployment
        self._settings = settings or ComposerSettings()

    def bind_assets(self) -> DeploymentProject:
        """Bind package, action and trigger overrides, in that order."""
        self._bind_package_inputs_and_annotations()
        self._bind_action_inputs_and_annotations()
        self._bind_trigger_inputs_and_annotations()
        return self.project

    def _matched_packages(self, *, warn: bool) -> Iterator[tuple[PackageSpec, PackageDeployment]]:
        """
        Pair deployment packages with composed packages.

        A deployment package with no composed counterpart ends the scan,
        unless skip_mismatched_packages is set, in which case only that
        package is skipped.
        """
        for name, pkg in resolve_packages(self.deployment).items():
            composed = self.project.packages.get(name)
            if composed is None:
                if warn:
                    logger.warning(
                        f"[deployment_reader] Package name in deployment file {name} "
                        "does not match with manifest file."
                    )
                if self._settings.skip_mismatched_packages:
                    continue
                break
            yield pkg, composed

    def _bind_package_inputs_and_annotations(self) -> None:
        if self.deployment.uses_deprecated_package():
            logger.warning(
                "[deployment_reader] The package YAML key in deployment file will soon be deprecated. "
                "Please use packages instead."
            )

        for pkg, composed in self._matched_packages(warn=True):
            package = composed.package
            if pkg.inputs:
                package.parameters = merge_inputs(pkg.inputs, package.parameters)
            merge_annotations(pkg.annotations, package.annotations, self.deployment.filepath)
            logger.debug(f"[deployment_reader] Bound package {package.name}")

    def _bind_action_inputs_and_annotations(self) -> None:
        for pkg, composed in self._matched_packages(warn=False):
            for name, spec in pkg.actions.items():
                record = composed.actions.get(name)
                if record is None:
                    continue
                action = record.action
                if spec.inputs:
                    action.parameters = merge_inputs(spec.inputs, action.parameters)
                merge_annotations(spec.annotations, action.annotations, self.deployment.filepath)
                logger.debug(f"[deployment_reader] Bound action {composed.package.name}/{name}")

    def _bind_trigger_inputs_and_annotations(self) -> None:
        triggers = self.project.triggers
        for pkg in resolve_packages(self.deployment).values():
            for name, spec in pkg.triggers.items():
                trigger = triggers.get(name)
                if trigger is None:
                    continue
                if spec.inputs:
                    trigger.parameters = merge_inputs(spec.inputs, trigger.parameters)
                merge_annotations(spec.annotations, trigger.annotations, self.deployment.filepath)
                logger.debug(f"[deployment_reader] Bound trigger {name}")
