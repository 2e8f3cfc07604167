"""
Summary: Build each publish configuration once and hand out independent copies.
Why: Integration tests need fresh, mutable app directories without rebuilding each time.
"""

from __future__ import annotations

import threading
from logging import Logger
from pathlib import Path
from types import TracebackType

from appstage.config.settings import CLEANUP_RETRY_ATTEMPTS, CLEANUP_RETRY_DELAY_SECONDS
from appstage.platform.logging import log_scope, logger as default_logger
from appstage.platform.retry import retry_operation

from ..adapters.filesystem_adapter import LocalFilesystemAdapter
from ..domain.errors import (
    ConfigurationMismatchError,
    PublishCacheDisposedError,
    UnsupportedFeatureError,
)
from ..domain.models import BuildConfigurationKey, DeploymentParameters, MasterBuildEntry
from .build_invoker import DotnetPublisher
from .ports import FilesystemPort, PublisherPort

CLEANUP_LOG_SCOPE = "publish-cleanup"


def ensure_supported(parameters: DeploymentParameters) -> None:
    """Reject deployment parameters the cache cannot key on.

    Raises:
        UnsupportedFeatureError: A publish-time override is set.
    """
    if parameters.publish_environment_variables:
        raise UnsupportedFeatureError("PublishEnvironmentVariables")
    if parameters.published_application_root_path is not None:
        raise UnsupportedFeatureError("PublishedApplicationRootPath")
    if parameters.restore_on_publish:
        raise UnsupportedFeatureError("RestoreOnPublish")


class PublishCache:
    """Cache publish outputs per build configuration for one application.

    Requests for the same :class:`BuildConfigurationKey` share a single master
    build; every request receives its own copy of that master. Requests are
    safe to issue from several threads: a per-key lock makes concurrent
    requests for one key wait for a single build, while different keys build
    in parallel.
    """

    _application_path: Path
    _publisher: PublisherPort
    _filesystem: FilesystemPort
    _logger: Logger
    _entries: dict[BuildConfigurationKey, MasterBuildEntry]
    _orphans: list[Path]
    _key_locks: dict[BuildConfigurationKey, threading.Lock]
    _guard: threading.Lock
    _disposed: bool
    _cleanup_attempts: int
    _cleanup_delay_seconds: float

    def __init__(
        self,
        application_path: Path | str,
        *,
        publisher: PublisherPort | None = None,
        filesystem: FilesystemPort | None = None,
        logger: Logger | None = None,
        cleanup_attempts: int = CLEANUP_RETRY_ATTEMPTS,
        cleanup_delay_seconds: float = CLEANUP_RETRY_DELAY_SECONDS,
    ) -> None:
        self._application_path = Path(application_path)
        self._cleanup_attempts = cleanup_attempts
        self._cleanup_delay_seconds = cleanup_delay_seconds
        self._logger = logger or default_logger
        self._publisher = publisher or DotnetPublisher(logger=self._logger)
        self._filesystem = filesystem or LocalFilesystemAdapter()
        self._entries = {}
        self._orphans = []
        self._key_locks = {}
        self._guard = threading.Lock()
        self._disposed = False

    @property
    def application_path(self) -> Path:
        return self._application_path

    def master_entries(self) -> list[MasterBuildEntry]:
        """Return a snapshot of the recorded master builds."""

        with self._guard:
            return list(self._entries.values())

    def request_published_copy(self, parameters: DeploymentParameters) -> Path:
        """Return a new directory holding a copy of the publish output.

        The caller owns the returned directory and may modify or delete it.

        Raises:
            ConfigurationMismatchError: ``parameters`` target another application.
            UnsupportedFeatureError: ``parameters`` use a publish-time override.
            PublishCacheDisposedError: The cache was already disposed.
            PublishError: The build failed (see ``DotnetPublisher.publish``).
            FilesystemError: A staging directory could not be created or copied.
        """
        if parameters.application_path != self._application_path:
            raise ConfigurationMismatchError(self._application_path, parameters.application_path)
        ensure_supported(parameters)

        key = BuildConfigurationKey.from_parameters(parameters)
        master = self._master_for(key, parameters)

        target = self._filesystem.create_temp_directory()
        self._logger.debug("Copying %s master %s to %s", key.describe(), master.path, target)
        self._filesystem.copy_tree(master.path, target)
        return target

    def _master_for(
        self, key: BuildConfigurationKey, parameters: DeploymentParameters
    ) -> MasterBuildEntry:
        with self._guard:
            self._ensure_not_disposed()
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            with self._guard:
                self._ensure_not_disposed()
                entry = self._entries.get(key)
            if entry is not None:
                self._logger.debug("Reusing published output for %s", key.describe())
                return entry

            self._logger.info("Publishing %s", key.describe())
            path = self._filesystem.create_temp_directory()
            try:
                self._publisher.publish(parameters, path)
            except BaseException:
                if not self._track(path, orphan=True):
                    self._remove_after_dispose(path)
                raise

            entry = MasterBuildEntry(key=key, path=path)
            if not self._track(path, entry=entry):
                self._remove_after_dispose(path)
                self._ensure_not_disposed()
            return entry

    def _track(
        self, path: Path, *, entry: MasterBuildEntry | None = None, orphan: bool = False
    ) -> bool:
        """Record a finished build directory; return False once the cache is disposed."""

        with self._guard:
            if self._disposed:
                return False
            if orphan:
                self._orphans.append(path)
            elif entry is not None:
                self._entries[entry.key] = entry
            return True

    def _remove_after_dispose(self, path: Path) -> None:
        # dispose() already ran, so nothing else will delete this build.
        self._logger.info("Cache disposed during build; removing %s", path)
        with log_scope(CLEANUP_LOG_SCOPE):
            self._remove(path)

    def _remove(self, path: Path) -> None:
        removed = retry_operation(
            lambda: self._filesystem.remove_tree(path),
            attempts=self._cleanup_attempts,
            delay_seconds=self._cleanup_delay_seconds,
            description=f"removing {path}",
        )
        if removed:
            self._logger.debug("Removed %s", path)

    def _ensure_not_disposed(self) -> None:
        if self._disposed:
            raise PublishCacheDisposedError(
                f"Publish cache for {self._application_path} has been disposed"
            )

    def dispose(self) -> None:
        """Delete every master build directory, best effort.

        Each deletion is retried; directories that still cannot be removed
        are logged and skipped. Directories left by failed builds are removed
        too. Builds still running when this is called remove their own output
        on completion. Copies handed to callers are not touched.
        """
        with self._guard:
            if self._disposed:
                return
            self._disposed = True
            paths = [entry.path for entry in self._entries.values()] + self._orphans
            self._entries.clear()
            self._orphans = []

        with log_scope(CLEANUP_LOG_SCOPE):
            for path in paths:
                self._remove(path)

    def __enter__(self) -> "PublishCache":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.dispose()


__all__ = ["CLEANUP_LOG_SCOPE", "PublishCache", "ensure_supported"]
