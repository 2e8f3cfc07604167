"""Where: src/appstage/platform/logging/scopes.py
What: Context-local logging scopes stamped onto every record.
Why: Let nested operations (publish, copy, cleanup) label their log output.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Final

_SCOPES: Final[ContextVar[tuple[str, ...]]] = ContextVar("appstage_log_scopes", default=())
_SEPARATOR: Final[str] = " > "


@contextmanager
def log_scope(name: str) -> Iterator[None]:
    """Push ``name`` onto the active scope stack for the duration of the block."""

    token = _SCOPES.set((*_SCOPES.get(), name))
    try:
        yield
    finally:
        _SCOPES.reset(token)


def current_scope() -> str:
    """Return the active scope path, or an empty string outside any scope."""

    return _SEPARATOR.join(_SCOPES.get())


class ScopeFilter(logging.Filter):
    """Attach the active scope to records as ``record.scope``."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "scope", None):
            record.scope = current_scope()
        return True


__all__ = ["ScopeFilter", "current_scope", "log_scope"]
