"""
Directory archiving for directory-based actions.

The archive is written next to the directory as `<dir>.zip` and removed
as soon as the caller's block exits, whether it succeeded or failed.
"""

from __future__ import annotations

import logging
import zipfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from wskcompose.config.platform import ZIP_FILE_EXTENSION

logger = logging.getLogger(__name__)


def zip_directory(source: Path, target: Path) -> Path:
    """Write every file under source into target, with paths relative to source."""
    with zipfile.ZipFile(target, "w", zipfile.ZIP_DEFLATED) as archive:
        for path in sorted(source.rglob("*")):
            if path.is_file():
                archive.write(path, path.relative_to(source).as_posix())
    return target


@contextmanager
def temporary_archive(directory: str | Path) -> Iterator[Path]:
    """
    Zip a directory for the duration of a block.

    Usage:
        with temporary_archive("actions/greeting") as zip_path:
            code = zip_path.read_bytes()
    """
    source = Path(directory)
    target = source.with_name(f"{source.name}.{ZIP_FILE_EXTENSION}")
    try:
        zip_directory(source, target)
        logger.debug(f"[archive] Created {target}")
        yield target
    finally:
        target.unlink(missing_ok=True)
        logger.debug(f"[archive] Removed {target}")
