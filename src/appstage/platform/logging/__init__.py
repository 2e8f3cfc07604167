"""Logging facade exports.

Where: platform/logging/__init__.py
What: Re-export configured logger, setup helpers, scopes and the Rich handler.
Why: Provide a single canonical import path for every layer.
"""

from __future__ import annotations

from .config import DEFAULT_LOG_FILE, logger, setup_logger
from .handlers import ScopedRichHandler
from .scopes import ScopeFilter, current_scope, log_scope

__all__ = [
    "DEFAULT_LOG_FILE",
    "ScopeFilter",
    "ScopedRichHandler",
    "current_scope",
    "log_scope",
    "logger",
    "setup_logger",
]
