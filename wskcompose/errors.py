"""
Exceptions for wskcompose.

Every fatal condition during parsing, composition or deployment-override
merging raises one of these. Policy problems (missing version, unsupported
limits, runtime mismatch outside strict mode) are logged as warnings and
never raised.

Hierarchy:
    WskComposeError
    ├── FileReadError
    ├── YAMLParserError
    ├── YAMLFileFormatError
    ├── ParameterResolutionError
    ├── InvalidRuntimeError
    ├── UnknownDependencyTypeError
    └── WebModeError
"""

from __future__ import annotations


class WskComposeError(Exception):
    """Base exception for all wskcompose errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FileReadError(WskComposeError):
    """Raised when a manifest or deployment file cannot be read."""

    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        return f"Failed to read file [{self.path}]: {self.message}"


class YAMLParserError(WskComposeError):
    """Raised when a YAML document is malformed or has unknown/duplicate keys."""

    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        return f"Failed to parse YAML file [{self.path}]: {self.message}"


class YAMLFileFormatError(WskComposeError):
    """Raised when a well-formed document is semantically invalid."""

    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        return f"Invalid format in file [{self.path}]: {self.message}"


class ParameterResolutionError(WskComposeError):
    """Raised when an input/output declaration cannot be resolved to a value."""

    def __init__(self, name: str, path: str, message: str):
        super().__init__(message)
        self.name = name
        self.path = path

    def __str__(self) -> str:
        return f"Parameter [{self.name}] in file [{self.path}]: {self.message}"


class InvalidRuntimeError(WskComposeError):
    """
    Raised when an action runtime cannot be determined or is not supported.

    Carries enough context for the user to fix the manifest: the action
    source file, the action name, the declared runtime and the list of
    runtimes the platform supports.
    """

    def __init__(
        self,
        message: str,
        *,
        file_name: str,
        action: str,
        runtime: str,
        supported: list[str],
    ):
        super().__init__(message)
        self.file_name = file_name
        self.action = action
        self.runtime = runtime
        self.supported = supported

    def __str__(self) -> str:
        return (
            f"{self.message} "
            f"[file={self.file_name} action={self.action} runtime={self.runtime}] "
            f"Supported runtimes: {', '.join(self.supported)}"
        )


class UnknownDependencyTypeError(WskComposeError):
    """Raised when a dependency location is neither a binding nor a remote repository."""

    def __init__(self, dependency: str, location: str):
        super().__init__(
            "Dependency type is unknown. Only /whisk.system bindings "
            "or github.com packages are supported."
        )
        self.dependency = dependency
        self.location = location

    def __str__(self) -> str:
        return f"[{self.dependency}] {self.message} (location={self.location!r})"


class WebModeError(WskComposeError):
    """Raised when a web-export mode is not one of yes/true, no/false or raw."""

    def __init__(self, mode: str):
        super().__init__(f"Invalid web-export mode: {mode!r}")
        self.mode = mode
