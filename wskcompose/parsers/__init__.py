"""
Manifest parsing and composition.

Usage:
    from wskcompose.parsers import ManifestParser

    parser = ManifestParser(settings)
    manifest = parser.parse_manifest("manifest.yaml")
    actions = parser.compose_actions_from_all_packages(manifest)
"""

from .loader import (
    DEPLOYMENT_FILE_NAME,
    MANIFEST_FILE_NAME,
    load_yaml,
    parse_deployment,
    parse_manifest,
    read_or_create_manifest,
    write_manifest,
)
from .manifest_parser import ManifestParser
from .parameters import resolve_annotations, resolve_parameter, resolve_parameters

__all__ = [
    "DEPLOYMENT_FILE_NAME",
    "MANIFEST_FILE_NAME",
    "ManifestParser",
    "load_yaml",
    "parse_deployment",
    "parse_manifest",
    "read_or_create_manifest",
    "resolve_annotations",
    "resolve_parameter",
    "resolve_parameters",
    "write_manifest",
]
