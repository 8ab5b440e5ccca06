"""
Action Composer.

Converts action declarations into platform action entities:

    1. source      `function` (or deprecated `location`); empty means no code
    2. packaging   directory -> temporary zip; file -> text or base64 code,
                   kind inferred from the extension
    3. runtime     declared runtime reconciled with the inferred kind
    4. main        entry point passed through
    5. inputs      resolved into parameters; outputs resolved, not attached
    6. annotations env-substituted, managed annotation appended
    7. web export  `web-export: true` adds the web annotation triple
    8. limits      validated field by field

Any error aborts composition of the whole manifest.
"""

from __future__ import annotations

import base64
import logging
from contextlib import ExitStack
from pathlib import Path

from wskcompose.config.platform import BINARY_FILE_EXTENSIONS, ZIP_FILE_EXTENSION
from wskcompose.errors import FileReadError, InvalidRuntimeError
from wskcompose.parsers.parameters import resolve_annotations, resolve_parameters
from wskcompose.schemas.manifest import ActionSpec
from wskcompose.utils.archive import temporary_archive
from wskcompose.utils.limits import compose_limits
from wskcompose.utils.runtimes import (
    RUNTIME_ERR_MESSAGE,
    default_kind,
    list_supported_runtimes,
    reconcile_runtime,
)
from wskcompose.utils.webaction import web_action
from wskcompose.whisk.entities import Action, Exec, KeyValue
from wskcompose.whisk.records import ActionRecord

logger = logging.getLogger(__name__)

NOT_SPECIFIED = "Not Specified in Manifest YAML"


def _runtime_error(message: str, source: Path, action: str, runtime: str) -> InvalidRuntimeError:
    return InvalidRuntimeError(
        message,
        file_name=source.name,
        action=action,
        runtime=runtime or NOT_SPECIFIED,
        supported=list_supported_runtimes(),
    )


def file_extension(path: Path) -> str:
    """Extension without its leading dot."""
    return path.suffix[1:] if path.suffix else ""


def load_file_exec(source: Path, runtime: str, action: str) -> tuple[str, Exec]:
    """
    Build the executable payload for a single source file.

    Returns:
        (extension, exec) where exec.kind is the extension-inferred kind

    Raises:
        InvalidRuntimeError: No kind can be inferred and none is declared,
            or a zip file has no declared runtime
        FileReadError: The source file cannot be read
    """
    ext = file_extension(source)
    kind = default_kind(ext)

    if not kind and not runtime and ext != ZIP_FILE_EXTENSION:
        raise _runtime_error(
            "Failed to discover runtime from the action source files. " + RUNTIME_ERR_MESSAGE,
            source,
            action,
            runtime,
        )

    if ext == ZIP_FILE_EXTENSION and not runtime:
        raise _runtime_error(
            "Runtime is missing for zip action. " + RUNTIME_ERR_MESSAGE, source, action, runtime
        )

    try:
        content = source.read_bytes()
    except OSError as e:
        raise FileReadError(str(source), str(e)) from e

    if ext in BINARY_FILE_EXTENSIONS:
        return ext, Exec(kind=kind, code=base64.b64encode(content).decode("ascii"), binary=True)
    try:
        code = content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FileReadError(str(source), f"source is not UTF-8 text: {e}") from e
    return ext, Exec(kind=kind, code=code)


def load_archive_exec(archive: Path, source: Path, runtime: str, action: str) -> tuple[str, Exec]:
    """Executable payload for a zipped directory. A runtime must be declared."""
    if not runtime:
        raise _runtime_error(
            "Runtime is missing for zip action. " + RUNTIME_ERR_MESSAGE, source, action, runtime
        )
    code = base64.b64encode(archive.read_bytes()).decode("ascii")
    return ZIP_FILE_EXTENSION, Exec(kind="", code=code, binary=True)


def compose_action(
    manifest_path: str,
    name: str,
    spec: ActionSpec,
    package_name: str,
    *,
    strict: bool = False,
    managed_annotation: KeyValue | None = None,
) -> ActionRecord:
    """
    Compose one action.

    A directory source is archived for the duration of this call only.
    """
    action = Action(name=name)
    function = spec.function or spec.location
    function_path = ""

    with ExitStack() as stack:
        if function:
            source = Path(manifest_path).parent / function
            function_path = str(source)

            if source.is_dir():
                archive = stack.enter_context(temporary_archive(source))
                ext, action.exec = load_archive_exec(archive, source, spec.runtime, name)
            else:
                ext, action.exec = load_file_exec(source, spec.runtime, name)

            decision = reconcile_runtime(
                ext, action.exec.kind, spec.runtime, strict=strict, action=name
            )
            if decision.error:
                raise _runtime_error(decision.error, source, name, spec.runtime)
            for warning in decision.warnings:
                logger.warning(f"[actions] {warning}")
            action.exec.kind = decision.kind

        if spec.main:
            action.exec.main = spec.main

        action.parameters = resolve_parameters(spec.inputs, manifest_path)

        # Outputs are validated only; the platform has no field for them.
        resolve_parameters(spec.outputs, manifest_path)

        action.annotations = resolve_annotations(spec.annotations)
        if managed_annotation is not None:
            action.annotations.append(managed_annotation.model_copy(deep=True))

        # The managed annotation stays on web actions; the triple is appended after it.
        if spec.web_export == "true":
            action.annotations = web_action("yes", action.annotations, False)

        if spec.limits is not None:
            action.limits = compose_limits(spec.limits, name)

    logger.debug(
        f"[actions] Composed {package_name}/{name} | kind={action.exec.kind or '-'} | "
        f"params={len(action.parameters)} | annotations={len(action.annotations)}"
    )
    return ActionRecord(action=action, package_name=package_name, filepath=function_path)


def compose_actions(
    manifest_path: str,
    actions: dict[str, ActionSpec],
    package_name: str,
    *,
    strict: bool = False,
    managed_annotation: KeyValue | None = None,
) -> list[ActionRecord]:
    """Compose every action of a package, failing on the first error."""
    return [
        compose_action(
            manifest_path,
            name,
            spec,
            package_name,
            strict=strict,
            managed_annotation=managed_annotation,
        )
        for name, spec in actions.items()
    ]
