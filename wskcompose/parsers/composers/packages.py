"""
Package Composer.
"""

from __future__ import annotations

import logging

from wskcompose.config.platform import (
    DEFAULT_PACKAGE_LICENSE,
    DEFAULT_PACKAGE_VERSION,
    KNOWN_LICENSES,
)
from wskcompose.parsers.parameters import resolve_annotations, resolve_parameters
from wskcompose.schemas.manifest import PackageSpec
from wskcompose.whisk.entities import KeyValue, Package

logger = logging.getLogger(__name__)


def _warn_missing(key: str, default: str) -> None:
    logger.warning(f"[packages] Mandatory key [{key}] is missing, using default value [{default}]")
    logger.warning(f"[packages] Value of key [{key}] is not persisted to the platform")


def compose_package(
    pkg: PackageSpec,
    package_name: str,
    file_path: str,
    *,
    managed_annotation: KeyValue | None = None,
) -> Package:
    """
    Compose the platform package entity.

    version and license are mandatory in a manifest; missing ones are
    defaulted with a warning.
    """
    if not pkg.version:
        _warn_missing("version", DEFAULT_PACKAGE_VERSION)
        pkg = pkg.model_copy(update={"version": DEFAULT_PACKAGE_VERSION})

    if not pkg.license:
        _warn_missing("license", DEFAULT_PACKAGE_LICENSE)
        pkg = pkg.model_copy(update={"license": DEFAULT_PACKAGE_LICENSE})
    elif pkg.license not in KNOWN_LICENSES:
        logger.warning(f"[packages] License [{pkg.license}] of package [{package_name}] is not a known SPDX identifier")

    package = Package(
        name=package_name,
        namespace=pkg.namespace,
        parameters=resolve_parameters(pkg.inputs, file_path),
        annotations=resolve_annotations(pkg.annotations),
    )
    if managed_annotation is not None:
        package.annotations.append(managed_annotation.model_copy(deep=True))

    logger.debug(
        f"[packages] Composed {package_name} | version={pkg.version} | "
        f"params={len(package.parameters)} | annotations={len(package.annotations)}"
    )
    return package
