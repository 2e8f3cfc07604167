"""Rich console handler that prefixes messages with their log scope."""

from __future__ import annotations

import logging

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.text import Text


class ScopedRichHandler(RichHandler):
    """Render ``record.scope`` ahead of the message body."""

    scope_style: str = "bold cyan"

    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        rendered = super().render_message(record, message)
        scope = getattr(record, "scope", "")
        if not scope or not isinstance(rendered, Text):
            return rendered
        return Text.assemble((f"[{scope}] ", self.scope_style), rendered)


__all__ = ["ScopedRichHandler"]
