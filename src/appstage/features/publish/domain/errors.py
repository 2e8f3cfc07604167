"""
Summary: Error taxonomy for publish requests and build invocations.
Why: Let test harnesses distinguish usage errors from build and platform failures.
"""

from __future__ import annotations

from pathlib import Path

from appstage.platform.filesystem import CopyError, FilesystemError


class PublishError(Exception):
    """Base exception for publish and staging failures."""


class ConfigurationMismatchError(PublishError):
    """Raised when a request targets a different application than the cache."""

    def __init__(self, expected: Path, actual: Path) -> None:
        super().__init__(f"ApplicationPath mismatch: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class UnsupportedFeatureError(PublishError):
    """Raised when deployment parameters use a feature the cache cannot honor."""

    def __init__(self, feature: str) -> None:
        super().__init__(f"DeploymentParameters.{feature} not supported")
        self.feature = feature


class MissingConfigurationError(PublishError):
    """Raised when a required deployment parameter is absent."""


class OSUnsupportedError(PublishError):
    """Raised when no runtime identifier exists for the host platform."""


class BuildLaunchError(PublishError):
    """Raised when the build tool executable cannot be started."""


class BuildTimeoutError(PublishError):
    """Raised when the build tool does not exit within the allotted time."""

    def __init__(self, command: str, timeout_seconds: float) -> None:
        super().__init__(f"{command} publish failed to exit after {timeout_seconds:g} seconds")
        self.timeout_seconds = timeout_seconds


class BuildFailedError(PublishError):
    """Raised when the build tool exits with a non-zero status."""

    def __init__(self, command: str, exit_code: int) -> None:
        super().__init__(f"{command} publish exited with exit code : {exit_code}")
        self.exit_code = exit_code


class PublishCacheDisposedError(PublishError):
    """Raised when a disposed cache receives another request."""


__all__ = [
    "BuildFailedError",
    "BuildLaunchError",
    "BuildTimeoutError",
    "ConfigurationMismatchError",
    "CopyError",
    "FilesystemError",
    "MissingConfigurationError",
    "OSUnsupportedError",
    "PublishCacheDisposedError",
    "PublishError",
    "UnsupportedFeatureError",
]
