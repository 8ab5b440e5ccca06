"""
Runtime inference and reconciliation.

The kind of a code action comes from two places: the source file
extension (via the static extension table) and an optional `runtime`
declared in the manifest. `reconcile_runtime` decides between them:

    declared     supported  archive  consistent   result
    -----------  ---------  -------  ----------   -------------------------------
    (none)       -          -        -            inferred kind
    x            no         yes      -            error
    x            no         no       -            inferred kind, warning
    x            yes        yes      -            x
    x            yes        no       yes          x
    x            yes        no       no           strict: x, else inferred kind;
                                                  mismatch warning either way
"""

from __future__ import annotations

from dataclasses import dataclass, field

from wskcompose.config.platform import (
    DEFAULT_RUNTIMES,
    FILE_EXTENSION_RUNTIME_MAP,
    SUPPORTED_RUNTIMES,
    ZIP_FILE_EXTENSION,
)

RUNTIME_ERR_MESSAGE = "Please specify any of the supported runtime for zip actions in manifest YAML."


def runtime_family(ext: str) -> str:
    """Runtime family for a file extension, or empty string."""
    return FILE_EXTENSION_RUNTIME_MAP.get(ext, "")


def default_kind(ext: str) -> str:
    """Default runtime kind for a file extension, or empty string."""
    return DEFAULT_RUNTIMES.get(runtime_family(ext), "")


def list_supported_runtimes() -> list[str]:
    return [kind for kinds in SUPPORTED_RUNTIMES.values() for kind in kinds]


def is_supported_runtime(runtime: str) -> bool:
    return runtime in list_supported_runtimes()


def is_runtime_consistent(ext: str, runtime: str) -> bool:
    """True when runtime belongs to the family the extension maps to."""
    return runtime in SUPPORTED_RUNTIMES.get(runtime_family(ext), [])


@dataclass(frozen=True)
class RuntimeDecision:
    """
    Outcome of runtime reconciliation.

    Attributes:
        kind: Kind to deploy with
        warnings: Messages to report, in order
        error: Set when composition must fail
    """

    kind: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    error: str | None = None


def reconcile_runtime(
    ext: str,
    inferred_kind: str,
    declared: str,
    *,
    strict: bool,
    action: str,
) -> RuntimeDecision:
    """
    Pick the kind for an action from its extension and declared runtime.

    Args:
        ext: Source extension without the dot ("zip" for directories)
        inferred_kind: Kind derived from the extension (may be empty)
        declared: Runtime declared in the manifest (may be empty)
        strict: Honor a declared runtime that contradicts the extension
        action: Action name, for messages
    """
    if not declared:
        return RuntimeDecision(kind=inferred_kind)

    is_archive = ext == ZIP_FILE_EXTENSION

    if not is_supported_runtime(declared):
        if is_archive:
            return RuntimeDecision(
                kind=inferred_kind,
                error=(
                    "Given runtime for a zip action is not supported by the platform. "
                    + RUNTIME_ERR_MESSAGE
                ),
            )
        return RuntimeDecision(
            kind=inferred_kind,
            warnings=(
                f"Runtime [{declared}] specified for action [{action}] is not supported.",
                f"Runtime of action [{action}] is set to [{inferred_kind}] based on its source file.",
            ),
        )

    if is_archive or is_runtime_consistent(ext, declared):
        return RuntimeDecision(kind=declared)

    mismatch = (
        f"Runtime [{declared}] specified for action [{action}] "
        f"does not match the action source file extension [{ext}]."
    )
    if strict:
        return RuntimeDecision(kind=declared, warnings=(mismatch,))
    return RuntimeDecision(
        kind=inferred_kind,
        warnings=(
            mismatch,
            f"Runtime of action [{action}] is set to [{inferred_kind}] based on its source file.",
        ),
    )
