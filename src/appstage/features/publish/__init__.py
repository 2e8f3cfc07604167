"""
Summary: Public surface for publishing applications and staging isolated copies.
Why: Give test harnesses one import path for the cache, publisher and errors.
"""

from .adapters.filesystem_adapter import LocalFilesystemAdapter
from .domain.errors import (
    BuildFailedError,
    BuildLaunchError,
    BuildTimeoutError,
    ConfigurationMismatchError,
    CopyError,
    FilesystemError,
    MissingConfigurationError,
    OSUnsupportedError,
    PublishCacheDisposedError,
    PublishError,
    UnsupportedFeatureError,
)
from .domain.models import (
    ApplicationType,
    BuildConfigurationKey,
    DeploymentParameters,
    MasterBuildEntry,
    RuntimeArchitecture,
)
from .domain.runtime_identifier import HostOS, detect_host_os, runtime_identifier
from .usecases.build_invoker import DotnetPublisher, build_arguments
from .usecases.ports import FilesystemPort, PublisherPort
from .usecases.publish_cache import PublishCache

__all__ = [
    "ApplicationType",
    "BuildConfigurationKey",
    "BuildFailedError",
    "BuildLaunchError",
    "BuildTimeoutError",
    "ConfigurationMismatchError",
    "CopyError",
    "DeploymentParameters",
    "DotnetPublisher",
    "FilesystemError",
    "FilesystemPort",
    "HostOS",
    "LocalFilesystemAdapter",
    "MasterBuildEntry",
    "MissingConfigurationError",
    "OSUnsupportedError",
    "PublishCache",
    "PublishCacheDisposedError",
    "PublishError",
    "PublisherPort",
    "RuntimeArchitecture",
    "UnsupportedFeatureError",
    "build_arguments",
    "detect_host_os",
    "runtime_identifier",
]
