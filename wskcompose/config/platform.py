"""
Static Platform Tables.

Values the platform defines and the composer consumes as configuration:
runtime families, supported runtime kinds, limit bounds and package
defaults. Nothing here is derived at runtime.
"""

from __future__ import annotations

# =============================================================================
# Runtimes
# =============================================================================

ZIP_FILE_EXTENSION = "zip"
JAR_FILE_EXTENSION = "jar"

# Source files with these extensions are shipped base64 encoded.
BINARY_FILE_EXTENSIONS = frozenset({ZIP_FILE_EXTENSION, JAR_FILE_EXTENSION})

# file extension -> runtime family
FILE_EXTENSION_RUNTIME_MAP: dict[str, str] = {
    "js": "nodejs",
    "py": "python",
    "swift": "swift",
    "php": "php",
    "jar": "java",
    "rb": "ruby",
    "go": "go",
}

# runtime family -> kind used when only the extension is known
DEFAULT_RUNTIMES: dict[str, str] = {
    "nodejs": "nodejs:10",
    "python": "python:3",
    "swift": "swift:4.1",
    "php": "php:7.2",
    "java": "java",
    "ruby": "ruby:2.5",
    "go": "go:1.11",
}

# runtime family -> kinds accepted by the platform
SUPPORTED_RUNTIMES: dict[str, list[str]] = {
    "nodejs": ["nodejs:6", "nodejs:8", "nodejs:10"],
    "python": ["python", "python:2", "python:3"],
    "swift": ["swift:3.1.1", "swift:4.1"],
    "php": ["php:7.1", "php:7.2"],
    "java": ["java"],
    "ruby": ["ruby:2.5"],
    "go": ["go:1.11"],
}

SEQUENCE_KIND = "sequence"

# =============================================================================
# Limits
# =============================================================================

# name -> (min, max), inclusive
LIMIT_BOUNDS: dict[str, tuple[int, int]] = {
    "timeout": (100, 300000),
    "memorySize": (128, 512),
    "logSize": (0, 10),
}

# Accepted in manifests, never sent to the platform.
UNSUPPORTED_LIMITS = (
    "concurrentActivations",
    "userInvocationRate",
    "codeSize",
    "parameterSize",
)

# =============================================================================
# Packages and dependencies
# =============================================================================

DEFAULT_PACKAGE_VERSION = "0.0.1"
DEFAULT_PACKAGE_LICENSE = "unlicensed"

# SPDX identifiers accepted without a warning
KNOWN_LICENSES = frozenset(
    {
        "Apache-2.0",
        "MIT",
        "BSD-2-Clause",
        "BSD-3-Clause",
        "GPL-2.0",
        "GPL-3.0",
        "LGPL-2.1",
        "LGPL-3.0",
        "MPL-2.0",
        "EPL-1.0",
        "EPL-2.0",
        "AGPL-3.0",
        "ISC",
        "Unlicense",
        DEFAULT_PACKAGE_LICENSE,
    }
)

DEFAULT_DEPENDENCY_VERSION = "master"
BINDING_NAMESPACE = "whisk.system"
REMOTE_REPOSITORY_HOSTS = ("github.com",)
DEPENDENCIES_DIRECTORY = "Packages"

# =============================================================================
# Annotations
# =============================================================================

FEED_ANNOTATION = "feed"
MANAGED_ANNOTATION = "whisk-managed"
