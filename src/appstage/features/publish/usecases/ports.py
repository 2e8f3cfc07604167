"""
Summary: Ports defining the publish cache's dependencies.
Why: Decouple the cache from the build tool and disk so tests can swap in fakes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from ..domain.models import DeploymentParameters


@runtime_checkable
class PublisherPort(Protocol):
    """Port for producing a publish output in a given directory."""

    def publish(self, parameters: DeploymentParameters, output_path: Path) -> None:
        """Publish the application into ``output_path`` or raise ``PublishError``."""
        ...


@runtime_checkable
class FilesystemPort(Protocol):
    """Port abstracting staging directory management."""

    def create_temp_directory(self) -> Path:
        """Create and return a new, empty, uniquely named directory."""
        ...

    def copy_tree(self, source: Path, target: Path) -> None:
        """Copy the full contents of ``source`` into ``target``."""
        ...

    def remove_tree(self, path: Path) -> None:
        """Delete ``path`` and everything beneath it."""
        ...


__all__ = ["FilesystemPort", "PublisherPort"]
