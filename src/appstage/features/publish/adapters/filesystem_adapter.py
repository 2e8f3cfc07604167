"""
Summary: Local filesystem adapter backing the publish cache's filesystem port.
Why: Keep the cache independent of concrete disk helpers and their temp root.
"""

from __future__ import annotations

from pathlib import Path

from appstage.platform import filesystem

from ..usecases.ports import FilesystemPort


class LocalFilesystemAdapter(FilesystemPort):
    """Thin wrapper around the local filesystem helpers."""

    def __init__(self, temp_root: Path | None = None) -> None:
        self._temp_root = temp_root

    def create_temp_directory(self) -> Path:
        return filesystem.create_temp_directory(self._temp_root)

    def copy_tree(self, source: Path, target: Path) -> None:
        filesystem.copy_tree(source, target)

    def remove_tree(self, path: Path) -> None:
        filesystem.remove_tree(path)


__all__ = ["LocalFilesystemAdapter"]
