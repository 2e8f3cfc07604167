"""
Summary: Map a host operating system and architecture to a runtime identifier.
Why: Standalone publishes need an explicit RID; the mapping stays pure for testing.
"""

from __future__ import annotations

import sys
from enum import Enum

from .errors import OSUnsupportedError
from .models import RuntimeArchitecture


class HostOS(str, Enum):
    """Operating systems the build tool can target."""

    WINDOWS = "windows"
    LINUX = "linux"
    MACOS = "macos"


_RID_PREFIXES: dict[HostOS, str] = {
    HostOS.WINDOWS: "win7",
    HostOS.LINUX: "linux",
    HostOS.MACOS: "osx",
}


def detect_host_os(platform: str | None = None) -> HostOS | None:
    """Classify ``platform`` (default ``sys.platform``), or ``None`` if unrecognized."""

    value = sys.platform if platform is None else platform
    if value in ("win32", "cygwin"):
        return HostOS.WINDOWS
    if value.startswith("linux"):
        return HostOS.LINUX
    if value == "darwin":
        return HostOS.MACOS
    return None


def runtime_identifier(host_os: HostOS | None, architecture: RuntimeArchitecture) -> str:
    """Return the runtime identifier, e.g. ``linux-x64``.

    Raises:
        OSUnsupportedError: ``host_os`` is not a recognized platform.
    """
    if host_os is None:
        raise OSUnsupportedError("Unrecognized operating system platform")
    return f"{_RID_PREFIXES[host_os]}-{architecture.value}"


__all__ = ["HostOS", "detect_host_os", "runtime_identifier"]
