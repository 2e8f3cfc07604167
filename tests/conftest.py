"""Shared pytest fixtures for publish cache tests."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from appstage.features.publish import (
    DeploymentParameters,
    LocalFilesystemAdapter,
    PublishCache,
)

PUBLISHED_FILES: dict[str, str] = {
    "app.dll": "binary",
    "appsettings.json": '{"Logging": {}}',
    "wwwroot/index.html": "<html></html>",
    "runtimes/linux-x64/native/libuv.so": "native",
}


class FakePublisher:
    """Publisher double that writes a small publish output and records calls."""

    def __init__(self, *, delay: float = 0.0) -> None:
        self.calls: list[tuple[DeploymentParameters, Path]] = []
        self.failures: list[BaseException] = []
        self._delay = delay
        self._lock = threading.Lock()

    def publish(self, parameters: DeploymentParameters, output_path: Path) -> None:
        with self._lock:
            self.calls.append((parameters, output_path))
            failure = self.failures.pop(0) if self.failures else None
        if self._delay:
            time.sleep(self._delay)
        if failure is not None:
            _ = (output_path / "partial.tmp").write_text("partial")
            raise failure
        write_published_files(output_path)


def write_published_files(output_path: Path) -> None:
    for relative, content in PUBLISHED_FILES.items():
        destination = output_path / relative
        destination.parent.mkdir(parents=True, exist_ok=True)
        _ = destination.write_text(content)


def relative_files(root: Path) -> dict[str, bytes]:
    """Map each file under ``root`` to its contents, keyed by POSIX relative path."""

    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in root.rglob("*")
        if path.is_file()
    }


@pytest.fixture
def app_dir(tmp_path: Path) -> Path:
    """Provide the source application directory bound to the cache."""

    path = tmp_path / "app"
    path.mkdir()
    return path


@pytest.fixture
def staging_root(tmp_path: Path) -> Path:
    """Provide the root under which masters and copies are created."""

    return tmp_path / "staging"


@pytest.fixture
def fake_publisher() -> FakePublisher:
    return FakePublisher()


@pytest.fixture
def publisher_factory() -> type[FakePublisher]:
    """Provide the fake publisher class for tests needing custom timing."""

    return FakePublisher


@pytest.fixture
def cache(
    app_dir: Path, staging_root: Path, fake_publisher: FakePublisher
) -> Iterator[PublishCache]:
    """Provide a publish cache over a fake publisher and the local filesystem."""

    publish_cache = PublishCache(
        app_dir,
        publisher=fake_publisher,
        filesystem=LocalFilesystemAdapter(staging_root),
        cleanup_attempts=2,
        cleanup_delay_seconds=0.0,
    )
    try:
        yield publish_cache
    finally:
        publish_cache.dispose()


@pytest.fixture
def release_parameters(app_dir: Path) -> DeploymentParameters:
    return DeploymentParameters(
        application_path=app_dir,
        target_framework="net6.0",
        configuration="Release",
    )


@pytest.fixture
def tree_snapshot() -> Callable[[Path], dict[str, bytes]]:
    """Provide ``relative_files`` for comparing directory trees."""

    return relative_files
