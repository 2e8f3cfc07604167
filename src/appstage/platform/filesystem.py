"""Filesystem helpers for staging build outputs.

Directory allocation, recursive copies and tolerant tree removal. Errors from
the operating system are wrapped in :class:`FilesystemError` subclasses so
callers can tell staging failures apart from their own I/O.
"""

from __future__ import annotations

import shutil
import uuid
from pathlib import Path

from appstage.config.settings import TEMP_ROOT
from appstage.platform.logging import logger


class FilesystemError(OSError):
    """Raised when a staging directory cannot be created."""


class CopyError(FilesystemError):
    """Raised when copying a directory tree fails part way through."""

    def __init__(self, source: Path, target: Path, reason: OSError) -> None:
        super().__init__(f"Failed to copy {source} to {target}: {reason}")
        self.source = source
        self.target = target
        self.reason = reason


def create_temp_directory(root: Path | None = None) -> Path:
    """Create a new, empty, uniquely named directory under ``root``.

    Args:
        root: Parent directory. Defaults to the configured temp root.

    Returns:
        Path: The created directory.

    Raises:
        FilesystemError: The directory could not be created.
    """
    base = root if root is not None else TEMP_ROOT
    path = base / uuid.uuid4().hex
    try:
        base.mkdir(parents=True, exist_ok=True)
        path.mkdir(exist_ok=False)
    except OSError as exc:
        raise FilesystemError(f"Cannot create temporary directory {path}: {exc}") from exc
    return path


def copy_tree(source: Path, target: Path) -> None:
    """Recursively copy every file and subdirectory of ``source`` into ``target``.

    Subdirectories are handled depth-first before the files of the current
    directory. ``target`` and its subdirectories are created when missing.
    A failure leaves whatever was already copied in place.

    Raises:
        CopyError: Any I/O failure while listing, creating or copying.
    """
    source = Path(source)
    target = Path(target)

    try:
        target.mkdir(parents=True, exist_ok=True)
        entries = sorted(source.iterdir())
    except OSError as exc:
        raise CopyError(source, target, exc) from exc

    for entry in entries:
        if entry.is_dir():
            copy_tree(entry, target / entry.name)

    logger.debug("Processing %s", target)
    for entry in entries:
        if entry.is_dir():
            continue
        destination = target / entry.name
        logger.debug("  Copying %s", entry.name)
        try:
            _ = shutil.copy2(entry, destination)
        except OSError as exc:
            raise CopyError(entry, destination, exc) from exc


def remove_tree(path: Path) -> None:
    """Delete ``path`` recursively; a directory that is already gone is fine."""

    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        logger.debug("Directory already removed: %s", path)


__all__ = [
    "CopyError",
    "FilesystemError",
    "copy_tree",
    "create_temp_directory",
    "remove_tree",
]
