"""Where: src/appstage/config/settings.py
What: Derived runtime settings sourced from persisted configuration.
Why: Expose validated constants to feature layers without file I/O.
Trade-offs: - Invalid values fall back to defaults instead of raising.
"""

from __future__ import annotations

from pathlib import Path

from appstage.config.config import (
    CLEANUP_RETRY_ATTEMPTS_DEFAULT,
    CLEANUP_RETRY_DELAY_SECONDS_DEFAULT,
    PUBLISH_TIMEOUT_SECONDS_DEFAULT,
    config as app_config,
)
from appstage.config.paths import default_temp_root

# Build tool ------------------------------------------------------------------

BUILD_TOOL_COMMAND: str = (app_config.build_tool_command or "").strip() or "dotnet"

_timeout = getattr(app_config, "publish_timeout_seconds", PUBLISH_TIMEOUT_SECONDS_DEFAULT)
PUBLISH_TIMEOUT_SECONDS: float = (
    float(_timeout)
    if isinstance(_timeout, (int, float)) and _timeout > 0
    else PUBLISH_TIMEOUT_SECONDS_DEFAULT
)


# Cleanup ---------------------------------------------------------------------

_attempts = getattr(app_config, "cleanup_retry_attempts", CLEANUP_RETRY_ATTEMPTS_DEFAULT)
CLEANUP_RETRY_ATTEMPTS: int = (
    _attempts
    if isinstance(_attempts, int) and _attempts > 0
    else CLEANUP_RETRY_ATTEMPTS_DEFAULT
)

_delay = getattr(app_config, "cleanup_retry_delay_seconds", CLEANUP_RETRY_DELAY_SECONDS_DEFAULT)
CLEANUP_RETRY_DELAY_SECONDS: float = (
    float(_delay) if isinstance(_delay, (int, float)) and _delay >= 0 else 0.0
)


# Scratch space ---------------------------------------------------------------

# A configured temp_root takes precedence over APPSTAGE_TEMP_ROOT.
TEMP_ROOT: Path = (
    default_temp_root()
    if app_config.temp_root is None
    else Path(app_config.temp_root).expanduser().resolve()
)


__all__ = [
    "BUILD_TOOL_COMMAND",
    "CLEANUP_RETRY_ATTEMPTS",
    "CLEANUP_RETRY_DELAY_SECONDS",
    "PUBLISH_TIMEOUT_SECONDS",
    "TEMP_ROOT",
]
