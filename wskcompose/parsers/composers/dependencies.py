"""
Dependency Composer.

A dependency is either a binding to a system package
(`/whisk.system/utils`) or a remote package fetched from a repository
(`github.com/owner/repo/path`). Any other location aborts composition.
"""

from __future__ import annotations

import logging
import posixpath

from wskcompose.config.platform import (
    BINDING_NAMESPACE,
    DEFAULT_DEPENDENCY_VERSION,
    DEPENDENCIES_DIRECTORY,
    REMOTE_REPOSITORY_HOSTS,
)
from wskcompose.errors import UnknownDependencyTypeError
from wskcompose.parsers.parameters import resolve_annotations, resolve_parameters
from wskcompose.schemas.manifest import PackageSpec
from wskcompose.whisk.records import DependencyRecord

logger = logging.getLogger(__name__)

_PROTOCOLS = ("https://", "http://")


def _strip_protocol(location: str) -> str:
    for protocol in _PROTOCOLS:
        if location.startswith(protocol):
            return location[len(protocol) :]
    return location


def is_binding(location: str) -> bool:
    return location.lstrip("/").startswith(BINDING_NAMESPACE)


def is_remote_repository(location: str) -> bool:
    host = _strip_protocol(location).split("/", 1)[0]
    return host in REMOTE_REPOSITORY_HOSTS


def split_remote_location(location: str) -> tuple[str, str]:
    """
    Split a remote location into repository URL and sub folder.

    https://github.com/owner/repo/packages/hello
        -> ("https://github.com/owner/repo", "packages/hello")
    """
    parts = _strip_protocol(location).strip("/").split("/")
    base_repo = "https://" + "/".join(parts[:3])
    sub_folder = "/".join(parts[3:])
    return base_repo, sub_folder


def compose_dependencies(
    pkg: PackageSpec,
    project_path: str,
    file_path: str,
    package_name: str,
) -> dict[str, DependencyRecord]:
    """
    Compose the dependencies of one package.

    Returns:
        Mapping of "<package>:<dependency>" to its record

    Raises:
        UnknownDependencyTypeError: A location is neither binding nor remote
        ParameterResolutionError: An input cannot be resolved
    """
    records: dict[str, DependencyRecord] = {}

    for key, dependency in pkg.dependencies.items():
        version = dependency.version or DEFAULT_DEPENDENCY_VERSION
        location = dependency.location
        base_repo = sub_folder = ""

        if is_binding(location):
            if not location.startswith("/"):
                location = "/" + location
            binding = True
        elif is_remote_repository(location):
            if not location.startswith(_PROTOCOLS):
                location = "https://" + location
            base_repo, sub_folder = split_remote_location(location)
            binding = False
        else:
            raise UnknownDependencyTypeError(key, location)

        name = f"{package_name}:{key}"
        records[name] = DependencyRecord(
            project_path=posixpath.join(project_path, DEPENDENCIES_DIRECTORY),
            package_name=package_name,
            location=location,
            version=version,
            parameters=resolve_parameters(dependency.inputs, file_path),
            annotations=resolve_annotations(dependency.annotations),
            is_binding=binding,
            base_repo=base_repo,
            sub_folder=sub_folder,
        )
        logger.debug(
            f"[dependencies] Composed {name} | "
            f"{'binding' if binding else 'remote'}={location} | version={version}"
        )

    return records
