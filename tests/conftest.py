"""
Pytest configuration and fixtures for wskcompose tests.
"""

import sys
import textwrap
from pathlib import Path

import pytest

# Add the repository root to path for imports
# This allows `from wskcompose.parsers import ...` to work
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from wskcompose.config import ComposerSettings  # noqa: E402


@pytest.fixture
def write_file(tmp_path):
    """Write a file under the temporary project directory and return its path."""

    def _write(relative: str, content: str | bytes) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def manifest_path(tmp_path):
    """Path of the manifest file in the temporary project directory."""
    return str(tmp_path / "manifest.yaml")


@pytest.fixture
def settings():
    """Default composer settings."""
    return ComposerSettings()


@pytest.fixture
def managed_settings():
    """Settings for a managed deployment."""
    return ComposerSettings(managed=True, project_name="demo")


@pytest.fixture
def hello_js():
    return "function main(params) { return {payload: 'Hello, ' + params.name}; }\n"
