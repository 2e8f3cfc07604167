"""
Summary: Deployment parameters, build configuration keys and cached master entries.
Why: Give the publish cache a structural key so equal requests share one build.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Final


class ApplicationType(str, Enum):
    """How the published application obtains its runtime."""

    PORTABLE = "portable"
    STANDALONE = "standalone"


class RuntimeArchitecture(str, Enum):
    """Processor architecture appended to runtime identifiers."""

    X86 = "x86"
    X64 = "x64"
    ARM = "arm"
    ARM64 = "arm64"

    @staticmethod
    def from_user_input(value: str) -> "RuntimeArchitecture":
        """Translate a raw architecture name into the matching member."""

        normalized = value.strip().lower()
        for architecture in RuntimeArchitecture:
            if architecture.value == normalized:
                return architecture
        valid: Final[str] = ", ".join(a.value for a in RuntimeArchitecture)
        msg = f"Unsupported runtime architecture '{value}'. Valid options: {valid}"
        raise ValueError(msg)


@dataclass(slots=True)
class DeploymentParameters:
    """Inputs describing which application to publish and how."""

    application_path: Path
    target_framework: str | None = None
    configuration: str = "Debug"
    application_type: ApplicationType = ApplicationType.PORTABLE
    runtime_architecture: RuntimeArchitecture = RuntimeArchitecture.X64
    publish_environment_variables: Mapping[str, str] = field(default_factory=dict)
    published_application_root_path: Path | None = None
    restore_on_publish: bool = False
    additional_publish_parameters: str = ""

    def __post_init__(self) -> None:
        self.application_path = Path(self.application_path)
        if not isinstance(self.runtime_architecture, RuntimeArchitecture):
            self.runtime_architecture = RuntimeArchitecture.from_user_input(
                str(self.runtime_architecture)
            )
        root = self.published_application_root_path
        if root is not None:
            self.published_application_root_path = Path(root) if str(root).strip() else None


@dataclass(slots=True, frozen=True)
class BuildConfigurationKey:
    """Identify a distinct publish output; equal keys mean an identical build."""

    target_framework: str | None
    configuration: str
    application_type: ApplicationType
    runtime_architecture: RuntimeArchitecture

    @classmethod
    def from_parameters(cls, parameters: DeploymentParameters) -> "BuildConfigurationKey":
        return cls(
            target_framework=parameters.target_framework,
            configuration=parameters.configuration,
            application_type=parameters.application_type,
            runtime_architecture=parameters.runtime_architecture,
        )

    def describe(self) -> str:
        """Return a compact label for log messages."""

        return (
            f"{self.target_framework}/{self.configuration}/"
            f"{self.application_type.value}/{self.runtime_architecture.value}"
        )


@dataclass(slots=True, frozen=True)
class MasterBuildEntry:
    """The canonical publish output for one key."""

    key: BuildConfigurationKey
    path: Path


__all__ = [
    "ApplicationType",
    "BuildConfigurationKey",
    "DeploymentParameters",
    "MasterBuildEntry",
    "RuntimeArchitecture",
]
