"""Shared path utilities for configuration, scratch and log locations.

This module centralizes how the library discovers where it reads its config
and where it writes the directories it stages.

Policy:
- Config: ``APPSTAGE_CONFIG_PATH`` if set, else repository-root
  ``<repo_root>/config/appstage.toml``.
- Temp root: ``APPSTAGE_TEMP_ROOT`` if set, else the interpreter's temp
  directory.
- Log file: only when ``APPSTAGE_LOG_FILE`` is set; console logging otherwise.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Callable, Final


_ENV_CONFIG_PATH: Final[str] = "APPSTAGE_CONFIG_PATH"
_ENV_TEMP_ROOT: Final[str] = "APPSTAGE_TEMP_ROOT"
_ENV_LOG_FILE: Final[str] = "APPSTAGE_LOG_FILE"


def resolve_overridable_path(
    *,
    explicit_path: Path | str | None,
    env: Mapping[str, str] | None,
    env_var: str | None,
    default_factory: Callable[[], Path],
) -> Path:
    """Resolve a configuration path honoring explicit and environment overrides."""

    if explicit_path is not None:
        return Path(explicit_path).expanduser().resolve()

    mapping = env if env is not None else os.environ
    if env_var:
        candidate = mapping.get(env_var) or ""
        candidate = candidate.strip()
        if candidate:
            return Path(candidate).expanduser().resolve()

    default_path = default_factory()
    return default_path.expanduser().resolve()


def _detect_repo_root(start: Path | None = None) -> Path:
    """Detect the repository root by walking up parents.

    Looks for markers like ``pyproject.toml`` or ``.git``.

    Args:
        start: Starting path. Defaults to this file's directory.

    Returns:
        Path: Detected repository root, or the current working directory
        if no marker is found.
    """
    here = (start or Path(__file__).resolve()).parent
    for p in [here, *here.parents]:
        if (p / "pyproject.toml").exists() or (p / ".git").exists():
            return p
    return Path.cwd()


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Get the path to the TOML config file."""

    return resolve_overridable_path(
        explicit_path=None,
        env=env,
        env_var=_ENV_CONFIG_PATH,
        default_factory=lambda: _detect_repo_root() / "config" / "appstage.toml",
    )


def default_temp_root(env: Mapping[str, str] | None = None) -> Path:
    """Get the directory under which build outputs and copies are created."""

    return resolve_overridable_path(
        explicit_path=None,
        env=env,
        env_var=_ENV_TEMP_ROOT,
        default_factory=lambda: Path(tempfile.gettempdir()),
    )


def default_log_file(env: Mapping[str, str] | None = None) -> Path | None:
    """Get the log file path, or ``None`` when file logging is not requested."""

    mapping = env if env is not None else os.environ
    if not (mapping.get(_ENV_LOG_FILE) or "").strip():
        return None
    return resolve_overridable_path(
        explicit_path=None,
        env=mapping,
        env_var=_ENV_LOG_FILE,
        default_factory=Path.cwd,
    )


__all__ = [
    "default_config_path",
    "default_log_file",
    "default_temp_root",
    "resolve_overridable_path",
]
