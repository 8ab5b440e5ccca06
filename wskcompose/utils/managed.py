"""
Managed deployment annotation.

In managed mode every entity carries one extra annotation identifying the
project and manifest that own it, so a later deployment can find and
reconcile what it created.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

from wskcompose.config.platform import MANAGED_ANNOTATION
from wskcompose.whisk.entities import KeyValue

PROJECT_NAME_KEY = "__OW_PROJECT_NAME"
PROJECT_HASH_KEY = "__OW_PROJECT_HASH"
FILE_KEY = "__OW_FILE"


def project_hash(manifest_path: str) -> str:
    """SHA-1 of the manifest content, empty when the file is unreadable."""
    path = Path(manifest_path)
    if not path.is_file():
        return ""
    return hashlib.sha1(path.read_bytes()).hexdigest()


def build_managed_annotation(project_name: str, manifest_path: str) -> KeyValue:
    return KeyValue(
        key=MANAGED_ANNOTATION,
        value={
            PROJECT_NAME_KEY: project_name,
            PROJECT_HASH_KEY: project_hash(manifest_path),
            FILE_KEY: manifest_path,
        },
    )
