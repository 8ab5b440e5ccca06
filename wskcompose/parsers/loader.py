"""
Manifest and deployment file loading.

YAML is decoded with a SafeLoader variant that rejects duplicate mapping
keys and leaves timestamps as plain strings; the result is validated
against the manifest schema, which rejects unknown keys.

Usage:
    manifest = parse_manifest("manifest.yaml")
    deployment = parse_deployment("deployment.yaml")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from wskcompose.errors import FileReadError, YAMLParserError
from wskcompose.schemas.manifest import ManifestDocument, SourceMapping

logger = logging.getLogger(__name__)

MANIFEST_FILE_NAME = "manifest.yaml"
DEPLOYMENT_FILE_NAME = "deployment.yaml"

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class StrictSafeLoader(yaml.SafeLoader):
    """SafeLoader that fails on duplicate keys and does not parse timestamps."""


StrictSafeLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _construct_unique_mapping(loader: StrictSafeLoader, node: yaml.MappingNode) -> SourceMapping:
    loader.flatten_mapping(node)
    seen = set()
    scalar_text = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=True)
        if key in seen:
            raise yaml.constructor.ConstructorError(
                "while constructing a mapping",
                node.start_mark,
                f"found duplicate key {key!r}",
                key_node.start_mark,
            )
        seen.add(key)
        if isinstance(value_node, yaml.ScalarNode) and value_node.style is None:
            scalar_text[key] = value_node.value
    return SourceMapping(loader.construct_mapping(node, deep=True), scalar_text=scalar_text)


StrictSafeLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_unique_mapping,
)


def load_yaml(path: str | Path) -> Any:
    """
    Read and decode a YAML file.

    Raises:
        FileReadError: The file cannot be read
        YAMLParserError: The content is not valid YAML or has duplicate keys
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise FileReadError(str(path), str(e)) from e

    try:
        return yaml.load(content, Loader=StrictSafeLoader)
    except yaml.YAMLError as e:
        raise YAMLParserError(str(path), str(e)) from e


def _parse_document(path: str | Path) -> ManifestDocument:
    data = load_yaml(path)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise YAMLParserError(str(path), "document root must be a mapping")

    try:
        document = ManifestDocument.model_validate(data)
    except ValidationError as e:
        raise YAMLParserError(str(path), str(e)) from e

    document.filepath = str(path)
    return document


def parse_manifest(path: str | Path) -> ManifestDocument:
    """Load a manifest file."""
    document = _parse_document(path)
    logger.info(f"[loader] Parsed manifest {path}")
    return document


def parse_deployment(path: str | Path) -> ManifestDocument:
    """Load a deployment file. Deployment files share the manifest schema."""
    document = _parse_document(path)
    logger.info(f"[loader] Parsed deployment {path}")
    return document


def read_or_create_manifest(path: str | Path = MANIFEST_FILE_NAME) -> ManifestDocument:
    """Load the manifest at path, or return an empty one if the file does not exist."""
    if Path(path).exists():
        return parse_manifest(path)
    return ManifestDocument(filepath=str(path))


def dump_manifest(manifest: ManifestDocument) -> str:
    data = manifest.model_dump(mode="json", by_alias=True, exclude_defaults=True)
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)


def write_manifest(manifest: ManifestDocument, path: str | Path) -> None:
    """Serialize a manifest to a YAML file."""
    path = Path(path)
    try:
        path.write_text(dump_manifest(manifest), encoding="utf-8")
    except OSError as e:
        raise FileReadError(str(path), str(e)) from e
    logger.info(f"[loader] Wrote manifest {path}")
